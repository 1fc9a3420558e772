from fastapi import APIRouter

from programme import catalogue

router = APIRouter()


@router.get("/")
def read_catalogue():
    """Subject types and the predefined subject names the forms offer."""
    return {
        "subject_types": catalogue.SUBJECT_TYPES,
        "station_types": sorted(catalogue.STATION_TYPES),
        "default_groups": catalogue.DEFAULT_GROUPS,
        "fixed_names": catalogue.FIXED_NAMES,
        "workshop_subjects": catalogue.PREDEFINED_WORKSHOP_SUBJECTS,
        "session_subjects": catalogue.PREDEFINED_SESSION_SUBJECTS,
        "practical_subjects": catalogue.PREDEFINED_PRACTICAL_SUBJECTS,
    }
