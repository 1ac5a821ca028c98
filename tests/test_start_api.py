from start_api import build_parser, uvicorn_options


def test_development_defaults_reload():
    options = uvicorn_options(build_parser().parse_args([]))
    assert options["port"] == 8000
    assert options["reload"] is True
    assert options["log_level"] == "debug"
    assert "workers" not in options


def test_production_uses_workers_without_reload():
    options = uvicorn_options(build_parser().parse_args(["--prod", "--workers", "3", "--port", "9000"]))
    assert options["workers"] == 3
    assert options["port"] == 9000
    assert "reload" not in options


def test_no_reload_flag():
    options = uvicorn_options(build_parser().parse_args(["--no-reload"]))
    assert "reload" not in options
