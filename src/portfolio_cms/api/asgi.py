"""ASGI entrypoint for the portfolio CMS API."""

from portfolio_cms.api.app import create_app
from portfolio_cms.containers import build_container

app = create_app(build_container())
