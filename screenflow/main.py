from contextlib import asynccontextmanager
import asyncio
import logging
import os

from fastapi import FastAPI

from screenflow.api.display import create_display_router
from screenflow.api.states import create_states_router
from screenflow.config import Config, GlobalConfig
from screenflow.dependencies import Runtime, build_runtime

logger = logging.getLogger(__name__)


def create_app(cfg: GlobalConfig | None = None, runtime: Runtime | None = None, run_loop: bool = True) -> FastAPI:
    """Builds the control API; the state machine loop runs as a background task for the app lifetime"""
    cfg = cfg or (runtime.config if runtime else Config().get())
    runtime = runtime or build_runtime(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        loop_task = None
        if run_loop:
            logger.info(f"Starting state machine loop at {cfg.system.target_fps} fps")
            loop_task = asyncio.create_task(runtime.state_machine.run_async(fps=cfg.system.target_fps))

        yield

        if loop_task is not None:
            loop_task.cancel()
            try:
                await loop_task
            except asyncio.CancelledError:
                pass
            logger.info("State machine loop stopped")

    app = FastAPI(lifespan=lifespan)
    app.state.runtime = runtime

    app.include_router(
        create_states_router(runtime.state_machine, cfg.transition),
        prefix="/api/states",
        tags=["states"],
    )
    app.include_router(create_display_router(runtime.surface), prefix="/api/display", tags=["display"])
    return app


def main():
    import uvicorn

    os.makedirs("logs", exist_ok=True)
    cfg = Config(os.environ.get("SCREENFLOW_CONFIG", "config.yaml")).get()
    uvicorn.run(create_app(cfg), host=cfg.web.host, port=cfg.web.port, log_config="log_conf.yaml")


if __name__ == "__main__":
    main()
