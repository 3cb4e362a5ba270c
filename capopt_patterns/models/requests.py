"""
Request models for the pattern service API
"""
from typing import List, Optional

from pydantic import ConfigDict, Field

from capopt_patterns.models.catalog import CamelModel


class PatternAssignmentRequest(CamelModel):
    """
    POST /v1/patterns/assign body

    industry and sectors are optional at the model level so the router can
    answer with the service's own VALIDATION_ERROR envelope instead of a 422.
    """

    industry: Optional[str] = Field(default=None, description="Industry code, e.g. MINING_METALS")
    sectors: Optional[List[str]] = Field(default=None, description="Sector codes within the industry")
    location: Optional[str] = Field(default=None, description="Free-text location, e.g. 'Mackay, QLD'")
    business_size: Optional[str] = Field(default=None, description="SMALL, MEDIUM or LARGE")
    risk_profile: Optional[str] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "industry": "MINING_METALS",
            "sectors": ["COAL", "PRODUCTION"],
            "location": "Mackay, QLD",
            "businessSize": "LARGE",
            "riskProfile": "HIGH"
        }
    })
