"""Featured events shown on the landing page."""

FEATURED_EVENTS = [
    {
        "title": "React Summit 2026",
        "image": "/static/images/event1.png",
        "slug": "react-summit-2026",
        "location": "Amsterdam, Netherlands",
        "date": "2026-11-13",
        "time": "09:00",
    },
    {
        "title": "PyCon US",
        "image": "/static/images/event2.png",
        "slug": "pycon-us",
        "location": "Long Beach, CA, USA",
        "date": "2027-05-14",
        "time": "08:30",
    },
    {
        "title": "HackMIT",
        "image": "/static/images/event3.png",
        "slug": "hackmit",
        "location": "Cambridge, MA, USA",
        "date": "2026-09-19",
        "time": "10:00",
    },
    {
        "title": "KubeCon + CloudNativeCon Europe",
        "image": "/static/images/event4.png",
        "slug": "kubecon-cloudnativecon-europe",
        "location": "London, UK",
        "date": "2027-03-23",
        "time": "09:00",
    },
    {
        "title": "Open Source Meetup Berlin",
        "image": "/static/images/event5.png",
        "slug": "open-source-meetup-berlin",
        "location": "Berlin, Germany",
        "date": "2026-12-02",
        "time": "18:30",
    },
    {
        "title": "ETHGlobal Online",
        "image": "/static/images/event6.png",
        "slug": "ethglobal-online",
        "location": "Online",
        "date": "2026-10-30",
        "time": "16:00",
    },
]
