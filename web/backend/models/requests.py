#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field


class PostingEventRequest(BaseModel):
    """
    A job posting pushed by the catalog.

    Only the id is validated here (numeric ids are accepted as strings);
    every other field is passed through untouched and parsed leniently
    by the matcher.
    """
    model_config = ConfigDict(extra='allow', coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1, description="Catalog job post id")
