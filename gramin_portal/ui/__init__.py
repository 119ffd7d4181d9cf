"""UI module for the NiceGUI interface. Entry point: ``gramin_portal.ui.main_app.run_app``."""
