import io

from fastapi import APIRouter, Query
from fastapi.responses import Response

from screenflow.render.surface import FrameSurface


def create_display_router(surface: FrameSurface) -> APIRouter:
    """Creates the router exposing the framebuffer"""
    router = APIRouter()

    @router.get("/info")
    async def get_display_info():
        return {
            "width": surface.width,
            "height": surface.height,
            "frames_presented": surface.present_count,
        }

    @router.get("/snapshot")
    async def get_snapshot(scale: int = Query(default=4, ge=1, le=16)):
        """Returns the last presented frame as PNG"""
        frame = surface.last_presented or surface.frame
        preview = FrameSurface(frame.width, frame.height)
        preview.load(frame.pixels)

        buffer = io.BytesIO()
        preview.to_image(scale).save(buffer, format="PNG")
        return Response(content=buffer.getvalue(), media_type="image/png")

    return router
