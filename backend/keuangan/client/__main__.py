import logging

from keuangan.core.config import settings
from keuangan.client.api import LedgerApi
from keuangan.client.dashboard import Dashboard
from keuangan.client.render import render_dashboard


def main():
    logging.basicConfig(level=(settings.log_level or "INFO").upper())
    with LedgerApi() as api:
        dash = Dashboard(api)
        dash.fetch_data()
        print(render_dashboard(dash))


if __name__ == "__main__":
    main()
