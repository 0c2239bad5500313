from typing import Optional

from pydantic import BaseModel, Field


class InfoRequest(BaseModel):
    # Validated by the service layer so empty values map to a 400 message
    url: Optional[str] = Field(None, description="Video page URL")
