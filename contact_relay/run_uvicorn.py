import os

import uvicorn

from contact_relay.logging_config import configure_logging


def main() -> None:
    """
    Uvicorn launcher.
    - Reads PORT from env (hosting platforms set this automatically).
    - Defaults to 8787 for local dev.
    - Logging configured before Uvicorn starts so workers inherit it.
    """
    configure_logging()

    port = int(os.environ.get("PORT", 8787))

    uvicorn.run(
        "contact_relay.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        log_config=None,
        use_colors=False,
    )


if __name__ == "__main__":
    main()
