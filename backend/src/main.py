import uvicorn

from infra.web.app import create_app

app = create_app()

if __name__ == "__main__":
    # structlog owns the handlers, uvicorn must not install its own
    uvicorn.run(
        app,
        host=app.state.host,
        port=app.state.port,
        access_log=False,
        log_config=None,
    )
