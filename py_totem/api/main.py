"""FastAPI main application."""

from typing import List, Optional

import structlog
from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings
from ..core.export import export_png, to_png_bytes
from ..core.generator import TotemIcon, render_icon
from ..core.palettes import resolve_palettes
from ..core.seeded_prng import new_session_seed
from ..core.status_palettes import known_statuses, palette_for_status
from ..logging_setup import configure_logging

configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

app = FastAPI(
    title="Totem Icon API",
    description="Deterministic pixel-art identifiers for tickets, contributors and personas",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

CELL_SIZE_QUERY = dict(
    ge=settings.min_cell_size,
    le=settings.max_cell_size,
    description="Pixel size of one logical cell",
)


# Request/Response models
class PaletteSectionModel(BaseModel):
    """One section of a palette override."""

    colors: Optional[List[str]] = Field(None, description="Fill colours, normalised to 5")
    background: Optional[str] = Field(None, description="Section background colour")
    border: Optional[str] = Field(None, description="Section border colour")


class PalettesModel(BaseModel):
    """Palette override; missing sections use the default palette."""

    section0: Optional[PaletteSectionModel] = None
    section1: Optional[PaletteSectionModel] = None
    section2: Optional[PaletteSectionModel] = None
    section3: Optional[PaletteSectionModel] = None
    section4: Optional[PaletteSectionModel] = None


class IconRenderRequest(BaseModel):
    """Request to render one icon."""

    seed: Optional[str] = Field(None, description="Seed string; omit for a random pattern")
    status: Optional[str] = Field(None, description="Status label used to pick a palette")
    palettes: Optional[PalettesModel] = Field(None, description="Explicit palette override")
    high_res: bool = Field(settings.default_high_res, description="Use the 24x60 tier")
    cell_size: int = Field(settings.default_cell_size, **CELL_SIZE_QUERY)
    framed: bool = Field(False, description="Include the outer border")


class GroupInfo(BaseModel):
    section: int
    group_index: int
    size: int
    color: str


class IconRenderResponse(BaseModel):
    """Rendered icon plus its group structure."""

    seed: Optional[str]
    session_seed: str
    width: int
    height: int
    columns: int
    rows: int
    data_url: str
    groups: List[GroupInfo]


def _png_response(icon: TotemIcon) -> Response:
    return Response(
        content=to_png_bytes(icon.pixels),
        media_type="image/png",
        headers={"X-Totem-Seed": icon.session_seed},
    )


def _render(seed: Optional[str], status: Optional[str], high_res: bool,
            cell_size: int, framed: bool, palettes=None) -> TotemIcon:
    try:
        return render_icon(
            seed,
            status=status,
            high_res=high_res,
            cell_size=cell_size,
            palettes=palettes,
            framed=framed,
        )
    except ValueError as e:
        logger.error("Icon rendering failed", seed=seed, error=str(e))
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Totem Icon API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/icons/random.png")
def random_icon(
    status: Optional[str] = Query(None, description="Status label"),
    high_res: bool = Query(settings.default_high_res),
    cell_size: int = Query(settings.default_cell_size, **CELL_SIZE_QUERY),
    framed: bool = Query(False),
):
    """Render a fresh random pattern; the seed used is returned in ``X-Totem-Seed``."""
    icon = _render(new_session_seed(), status, high_res, cell_size, framed)
    return _png_response(icon)


@app.get("/icons/{seed}.png")
def seeded_icon(
    seed: str,
    status: Optional[str] = Query(None, description="Status label"),
    high_res: bool = Query(settings.default_high_res),
    cell_size: int = Query(settings.default_cell_size, **CELL_SIZE_QUERY),
    framed: bool = Query(False),
):
    """Render the icon for ``seed`` as PNG."""
    logger.info("Icon requested", seed=seed, status=status, high_res=high_res)
    icon = _render(seed, status, high_res, cell_size, framed)
    return _png_response(icon)


@app.get("/palettes")
async def list_statuses():
    """Status labels with a dedicated palette mix."""
    return {"statuses": known_statuses()}


@app.get("/palettes/{status}")
def status_palette(status: str):
    """The palette a status label resolves to."""
    return palette_for_status(status).to_dict()


@app.post("/icons/render", response_model=IconRenderResponse)
def render(request: IconRenderRequest):
    """Render an icon with optional palette override and return a PNG data URL."""
    palettes = None
    if request.palettes is not None:
        palettes = resolve_palettes(request.palettes.model_dump(exclude_none=True))

    icon = _render(
        request.seed,
        request.status,
        request.high_res,
        request.cell_size,
        request.framed,
        palettes=palettes,
    )
    data_url = export_png(icon.pixels)

    return IconRenderResponse(
        seed=icon.seed,
        session_seed=icon.session_seed,
        width=int(icon.pixels.shape[1]),
        height=int(icon.pixels.shape[0]),
        columns=icon.config.columns,
        rows=icon.config.rows,
        data_url=data_url,
        groups=[
            GroupInfo(
                section=meta.section,
                group_index=meta.group_index,
                size=len(group),
                color=group[0].color,
            )
            for meta, group in zip(icon.group_meta, icon.groups)
        ],
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
