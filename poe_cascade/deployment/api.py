"""
deployment/api.py - REST API

Exposes the chain calculator and its physics primitives over HTTP for
form-driven front ends.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from poe_cascade.bootstrap.config import POECascadeConfig, get_config
from poe_cascade.core.constants import PSE_PRESETS_WATTS, POE_CASCADE_VERSION
from poe_cascade.chain.calculator import ChainCalculator
from poe_cascade.chain.schema import ChainConfig, LinkInput
from poe_cascade.chain.summary import summarize_chain
from poe_cascade.physics.cable import CABLE_TYPES, cable_power_loss, get_cable_types, power_after_cable
from poe_cascade.physics.device import device_pse_output
from poe_cascade.physics.situation import CABLE_SITUATION_MULTIPLIERS, get_cable_situations

logger = logging.getLogger("deployment.api")


# =============================================================================
# Request/Response Models
# =============================================================================

class LinkModel(BaseModel):
    """One cable segment and the device behind it."""
    model_config = ConfigDict(allow_inf_nan=False)

    device_draw_watts: Optional[float] = Field(default=None, ge=0)
    efficiency_percent: Optional[float] = Field(default=None, gt=0, le=100)
    cable_length_meters: Optional[float] = Field(default=None, ge=0)
    cable_type: Optional[str] = None

    def to_link(self) -> LinkInput:
        return LinkInput(
            device_draw_watts=self.device_draw_watts,
            efficiency_percent=self.efficiency_percent,
            cable_length_meters=self.cable_length_meters,
            cable_type=self.cable_type,
        )


class ChainCalculationRequest(BaseModel):
    """Request model for a chain calculation; omitted globals use configured defaults."""
    model_config = ConfigDict(allow_inf_nan=False)

    switch_output_watts: Optional[float] = Field(default=None, gt=0)
    two_pair: Optional[bool] = None
    cable_situation: Optional[str] = None
    links: List[LinkModel] = Field(default_factory=list)

    def to_chain_config(self, defaults: ChainConfig) -> ChainConfig:
        return ChainConfig(
            switch_output_watts=(
                self.switch_output_watts
                if self.switch_output_watts is not None
                else defaults.switch_output_watts
            ),
            two_pair=self.two_pair if self.two_pair is not None else defaults.two_pair,
            cable_situation=self.cable_situation or defaults.cable_situation,
        )


class CableLossRequest(BaseModel):
    """Request model for a single-segment cable loss."""
    model_config = ConfigDict(allow_inf_nan=False)

    watts: float = Field(ge=0)
    length_meters: float = Field(ge=0)
    cable_type: Optional[str] = None
    two_pair: bool = True


class DeviceOutputRequest(BaseModel):
    """Request model for a single device pass-through."""
    model_config = ConfigDict(allow_inf_nan=False)

    input_watts: float = Field(ge=0)
    draw_watts: float = Field(ge=0)
    efficiency_percent: Optional[float] = Field(default=None, gt=0, le=100)


def create_fastapi_app(config: POECascadeConfig = None) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        config: Application configuration (loaded when omitted)

    Returns:
        FastAPI application instance
    """
    config = config or get_config()
    api_config = config.api
    calculator = ChainCalculator()

    app = FastAPI(
        title="POE Cascade Calculator API",
        description="Power flow through daisy-chained POE devices",
        version=POE_CASCADE_VERSION,
        docs_url=api_config.docs_url if api_config.enable_docs else None,
        redoc_url="/redoc" if api_config.enable_docs else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Health Endpoints
    # =========================================================================

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": POE_CASCADE_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/api/v1/meta")
    async def get_meta():
        """Return choice lists and defaults for form auto-configuration."""
        return {
            "version": POE_CASCADE_VERSION,
            "cable_types": get_cable_types(),
            "cable_situations": get_cable_situations(),
            "pse_presets_watts": list(PSE_PRESETS_WATTS),
            "defaults": config.chain.to_chain_config().to_dict(),
            "endpoints": {
                "chain": "/api/v1/chain",
                "cable_loss": "/api/v1/cable-loss",
                "device_output": "/api/v1/device-output",
                "health": "/health",
            },
        }

    # =========================================================================
    # Catalog Endpoints
    # =========================================================================

    @app.get("/api/v1/cable-types")
    async def list_cable_types():
        """List cable grades and their loop resistance."""
        return [CABLE_TYPES[key].to_dict() for key in get_cable_types()]

    @app.get("/api/v1/situations")
    async def list_situations():
        """List cable situations and their loss multipliers."""
        return [
            {"key": key, "multiplier": CABLE_SITUATION_MULTIPLIERS[key]}
            for key in get_cable_situations()
        ]

    # =========================================================================
    # Calculation Endpoints
    # =========================================================================

    @app.post("/api/v1/chain")
    async def calculate_chain_endpoint(request: ChainCalculationRequest) -> Dict[str, Any]:
        """Calculate power flow through the chain."""
        chain_config = request.to_chain_config(config.chain.to_chain_config())
        stages = calculator.calculate([link.to_link() for link in request.links], chain_config)
        summary = summarize_chain(stages)

        logger.info(
            f"Chain calculated: {len(request.links)} link(s), "
            f"{chain_config.switch_output_watts:g} W, result={summary.level.value}"
        )
        return {
            "config": chain_config.to_dict(),
            "stages": [stage.to_dict() for stage in stages],
            "summary": summary.to_dict(),
        }

    @app.post("/api/v1/cable-loss")
    async def cable_loss_endpoint(request: CableLossRequest) -> Dict[str, Any]:
        """Resistive loss of one segment (no situation scaling)."""
        return {
            "loss_watts": cable_power_loss(
                request.watts, request.length_meters, request.cable_type, request.two_pair
            ),
            "watts_after_cable": power_after_cable(
                request.watts, request.length_meters, request.cable_type, request.two_pair
            ),
        }

    @app.post("/api/v1/device-output")
    async def device_output_endpoint(request: DeviceOutputRequest) -> Dict[str, Any]:
        """Power one device passes downstream."""
        efficiency = LinkInput(efficiency_percent=request.efficiency_percent).resolved_efficiency_percent
        return {
            "output_watts": device_pse_output(request.input_watts, request.draw_watts, efficiency),
            "efficiency_percent": efficiency,
        }

    return app


# Module-level app instance for uvicorn
app = create_fastapi_app()
