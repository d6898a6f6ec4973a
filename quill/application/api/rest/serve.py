"""Run the Quill API with uvicorn."""

import os

import logfire
import uvicorn


def main() -> None:
    # Logfire must be configured before the app is created
    logfire.configure(
        service_name="quill",
        send_to_logfire="if-token-present",
        console=False,
    )
    uvicorn.run(
        "quill.application.api.rest.app:create_app",
        factory=True,
        host=os.environ.get("QUILL_HOST", "127.0.0.1"),
        port=int(os.environ.get("QUILL_PORT", "8000")),
        log_config=None,  # keep configure_logging's handlers
    )


if __name__ == "__main__":
    main()
