"""
Pydantic schemas for profile endpoints.
"""
import datetime as dt
from typing import List, Optional, Union
from pydantic import BaseModel, Field

class ProfileIn(BaseModel):
    """
    Create-or-update payload. Only non-empty fields are written.
    skills is a comma separated string ("python, sql") or a list of strings.
    """
    status: Optional[str] = None
    skills: Optional[Union[str, List[str]]] = None
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    # Social links
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

class ExperienceIn(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    from_: Optional[dt.date] = Field(default=None, alias="from")
    to: Optional[dt.date] = None
    current: bool = False
    description: Optional[str] = None

    class Config:
        """Accept both "from" and "from_" when populating."""
        populate_by_name = True

class EducationIn(BaseModel):
    school: Optional[str] = None
    degree: Optional[str] = None
    fieldofstudy: Optional[str] = None
    from_: Optional[dt.date] = Field(default=None, alias="from")
    to: Optional[dt.date] = None
    current: bool = False
    description: Optional[str] = None

    class Config:
        populate_by_name = True
