"""Kubernetes network planning endpoints."""

import logging

import yaml
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..auth import get_current_user
from ..errors import UnknownDeploymentSizeError
from ..generator import generate_network_plan, list_deployment_tiers
from ..models.network_plan import NetworkPlan, NetworkPlanRequest
from ..tiers import PROVIDER_ALIASES, PROVIDER_SCHEMES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/kubernetes", tags=["kubernetes"])


@router.post("/network-plan", response_model=NetworkPlan)
async def create_network_plan(
    request: NetworkPlanRequest,
    output_format: str = Query("json", alias="format", pattern="^(json|yaml)$"),
    current_user: str = Depends(get_current_user),
):
    """Generate a network plan for a deployment tier.

    Returns VPC, public/private subnets, pod CIDR and service CIDR. Use
    ``?format=yaml`` for a YAML body.

    Raises:
        CidrPlanError: 400 on invalid input, 500 if the plan cannot be assembled
    """
    plan = generate_network_plan(request)

    logger.info(
        "Generated network plan",
        extra={
            "deployment_size": plan.deployment_size,
            "provider": plan.provider,
            "vpc_cidr": plan.vpc.cidr,
            "user": current_user,
        },
    )

    if output_format == "yaml":
        body = yaml.safe_dump(plan.model_dump(mode="json", by_alias=True), sort_keys=False)
        return Response(content=body, media_type="application/yaml")

    return plan


@router.get("/tiers")
async def list_tiers(size: str | None = Query(default=None, description="Optional tier name filter")):
    """List deployment tiers, or a single tier when ``size`` is given."""
    return list_deployment_tiers(size)


@router.get("/tiers/{size}")
async def get_tier(size: str):
    """Get a single deployment tier.

    Raises:
        HTTPException: 404 if the tier does not exist
    """
    try:
        return list_deployment_tiers(size)
    except UnknownDeploymentSizeError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.get("/providers")
async def list_providers():
    """List provider zone-naming schemes and accepted aliases."""
    return {
        "providers": {name: scheme.model_dump(mode="json", by_alias=True) for name, scheme in PROVIDER_SCHEMES.items()},
        "aliases": dict(PROVIDER_ALIASES),
    }
