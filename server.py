#!/usr/bin/env python3
"""
server.py - Template rendering service

FastAPI-based server that renders lispy templates, either ad-hoc from the
request body or from template configurations on disk.
"""

import logging
import os
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from habe import TemplateError, __version__
from habe.config import ConfigLoader, DataLoader
from habe.rendering import TemplateRenderer

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(title="Template Rendering API", version=__version__)

# Initialize components
config_loader = ConfigLoader(os.environ.get("HABE_CONFIG_DIR", "configs"))
data_loader = DataLoader(os.environ.get("HABE_DATA_DIR", "data"))
renderer = TemplateRenderer(config_loader, data_loader)


class RenderRequest(BaseModel):
    template: str
    data: Any = None


@app.post("/render")
async def render_template(request: RenderRequest) -> Dict[str, str]:
    """
    Render an ad-hoc template.

    Args:
        request: Template source and the data to render it with

    Returns:
        Rendered output
    """
    try:
        return {"output": renderer.render_string(request.template, request.data)}
    except TemplateError as e:
        logger.warning("Ad-hoc render failed: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/render/{template_name}")
async def render_named(template_name: str, request: Request) -> Dict[str, Any]:
    """
    Render a template configuration by name.

    Query parameters become ${var} values for the config's foreach expression,
    e.g. /render/order_lines?order=A100
    """
    variables = dict(request.query_params)
    try:
        outputs = renderer.render(template_name, variables)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TemplateError as e:
        logger.warning("Render of %s failed: %s", template_name, e)
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"template": template_name, "outputs": outputs}


@app.get("/helpers")
async def list_helpers():
    """List registered helper names."""
    return {"helpers": sorted(renderer.env.helpers)}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)
