from fastapi import FastAPI
from mangum import Mangum

from campus_directory import main
from campus_directory.config.settings import settings


def test_exported_app_matches_environment():
    if settings.APP_ENV == "development":
        assert main.app is main._fastapi_app
    else:
        assert isinstance(main.app, Mangum)
    assert isinstance(main._fastapi_app, FastAPI)


def test_entry_point_usage_is_documented():
    assert "APP_ENV=development" in main.__doc__
