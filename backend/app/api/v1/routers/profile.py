from fastapi import APIRouter, Depends

from app.api.v1.deps import get_current_user, get_current_user_id, parse_id
from app.core.errors import NotFoundError, ValidationError, field_error
from app.models.profile import Profile
from app.models.user import User
from app.schemas.profile import EducationIn, ExperienceIn, ProfileIn
from app.services.profiles import (
    NO_PROFILE_MSG,
    ProfilePatch,
    add_entry,
    delete_account,
    remove_entry,
    upsert_profile,
)

router = APIRouter(prefix="/profile", tags=["profile"])

PROFILE_NOT_FOUND_MSG = "No profile found!"


def _profile_to_dict(p: Profile) -> dict:
    """
    Convert a Profile (with its user fetched) to the API representation.
    Only the owner's id, name and avatar are joined in.
    """
    return {
        "id": str(p.id),
        "user": {"id": str(p.user.id), "name": p.user.name, "avatar": p.user.avatar},
        "company": p.company,
        "website": p.website,
        "location": p.location,
        "status": p.status,
        "skills": p.skills or [],
        "bio": p.bio,
        "githubusername": p.githubusername,
        "social": p.social or {},
        "experience": p.experience or [],
        "education": p.education or [],
        "date": p.created_at.isoformat() if p.created_at else None,
    }


async def _joined(profile: Profile) -> dict:
    await profile.fetch_related("user")
    return _profile_to_dict(profile)


def _entry_dates(body, errors: list) -> dict:
    if body.from_ is None:
        errors.append(field_error("from", "A start date is necessary"))
    return {
        "from": body.from_.isoformat() if body.from_ else None,
        # A current position has no end date
        "to": body.to.isoformat() if body.to and not body.current else None,
        "current": body.current,
    }


@router.get("/me")
async def get_my_profile(user_id: str = Depends(get_current_user_id)):
    """
    Get the current user's profile joined with their name and avatar.

    Raises:
        NotFoundError (404): The user has no profile yet
    """
    owner_id = parse_id(user_id, NO_PROFILE_MSG)
    profile = await Profile.filter(user_id=owner_id).select_related("user").first()
    if not profile:
        raise NotFoundError(NO_PROFILE_MSG)
    return _profile_to_dict(profile)


@router.post("")
async def create_or_update_profile(body: ProfileIn, user: User = Depends(get_current_user)):
    """
    Create the current user's profile, or update the fields that were sent.

    Empty or omitted fields are left untouched on update. skills is split
    on commas and trimmed.

    Raises:
        ValidationError (400): Missing status or skills
        NotFoundError (404): The user was deleted after the token was issued
    """
    patch = ProfilePatch.from_input(body)
    errors = []
    if not patch.status:
        errors.append(field_error("status", "You need to provide a status"))
    if not patch.skills:
        errors.append(field_error("skills", "You need to populate your skill-set"))
    if errors:
        raise ValidationError(errors)

    profile = await upsert_profile(user.id, patch)
    return await _joined(profile)


@router.get("")
async def list_profiles():
    """
    Get all profiles (public), newest first.
    """
    rows = await Profile.all().select_related("user").order_by("-created_at")
    return [_profile_to_dict(p) for p in rows]


@router.get("/user/{user_id}")
async def get_profile_by_user(user_id: str):
    """
    Get a profile by its owner's user id (public).

    Raises:
        NotFoundError (404): Malformed id, or no profile for that user
    """
    owner_id = parse_id(user_id, PROFILE_NOT_FOUND_MSG)
    profile = await Profile.filter(user_id=owner_id).select_related("user").first()
    if not profile:
        raise NotFoundError(PROFILE_NOT_FOUND_MSG)
    return _profile_to_dict(profile)


@router.delete("")
async def delete_profile(user: User = Depends(get_current_user)):
    """
    Delete the current user's account: posts, profile and user, in one transaction.

    Raises:
        NotFoundError (404): The account was already deleted
    """
    await delete_account(user.id)
    return {"msg": "User successfully deleted"}


@router.put("/experience")
async def add_experience(body: ExperienceIn, user_id: str = Depends(get_current_user_id)):
    """
    Add an experience entry to the top of the current user's profile.

    Raises:
        ValidationError (400): Missing title, company or start date
        NotFoundError (404): The user has no profile yet
    """
    errors = []
    if not body.title or not body.title.strip():
        errors.append(field_error("title", "A title is necessary"))
    if not body.company or not body.company.strip():
        errors.append(field_error("company", "A company name is necessary"))
    dates = _entry_dates(body, errors)
    if errors:
        raise ValidationError(errors)

    entry = {
        "title": body.title.strip(),
        "company": body.company.strip(),
        "location": body.location,
        **dates,
        "description": body.description,
    }
    profile = await add_entry(parse_id(user_id, NO_PROFILE_MSG), "experience", entry)
    return await _joined(profile)


@router.delete("/experience/{exp_id}")
async def delete_experience(exp_id: str, user_id: str = Depends(get_current_user_id)):
    """
    Remove an experience entry by id.

    Raises:
        NotFoundError (404): No profile, or no experience entry with that id
    """
    profile = await remove_entry(parse_id(user_id, NO_PROFILE_MSG), "experience", exp_id, "Experience not found")
    return await _joined(profile)


@router.put("/education")
async def add_education(body: EducationIn, user_id: str = Depends(get_current_user_id)):
    """
    Add an education entry to the top of the current user's profile.

    Raises:
        ValidationError (400): Missing school, degree, field of study or start date
        NotFoundError (404): The user has no profile yet
    """
    errors = []
    if not body.school or not body.school.strip():
        errors.append(field_error("school", "A School Name is necessary"))
    if not body.degree or not body.degree.strip():
        errors.append(field_error("degree", "A Degree Title is necessary"))
    if not body.fieldofstudy or not body.fieldofstudy.strip():
        errors.append(field_error("fieldofstudy", "A Field of Study is necessary"))
    dates = _entry_dates(body, errors)
    if errors:
        raise ValidationError(errors)

    entry = {
        "school": body.school.strip(),
        "degree": body.degree.strip(),
        "fieldofstudy": body.fieldofstudy.strip(),
        **dates,
        "description": body.description,
    }
    profile = await add_entry(parse_id(user_id, NO_PROFILE_MSG), "education", entry)
    return await _joined(profile)


@router.delete("/education/{edu_id}")
async def delete_education(edu_id: str, user_id: str = Depends(get_current_user_id)):
    """
    Remove an education entry by id.
    """
    profile = await remove_entry(parse_id(user_id, NO_PROFILE_MSG), "education", edu_id, "Education not found")
    return await _joined(profile)
