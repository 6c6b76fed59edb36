from nicegui import ui

from wallet.app import App
from wallet.config import settings
from wallet.logging_setup import configure_logging
from wallet.services import create_store


def main():
    configure_logging(settings.log_level)
    store = create_store(settings)

    def root():
        # Each client gets its own App over the shared store
        App(store)

    run_kwargs = {}
    if settings.native:
        run_kwargs["window_size"] = (1400, 900)

    # Run NiceGUI
    ui.run(
        root,
        title=settings.app_title,
        native=settings.native,
        port=settings.port,
        reload=False,
        **run_kwargs,
    )

if __name__ in {"__main__", "__mp_main__"}:
    main()
