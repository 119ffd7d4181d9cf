"""Run the Gramin Portal UI."""

from gramin_portal.ui.main_app import run_app

if __name__ in {"__main__", "__mp_main__"}:
    run_app()
