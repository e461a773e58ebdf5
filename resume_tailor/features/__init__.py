from .resume_features import total_years_experience
from .resume_text import resume_to_text

__all__ = [
    "resume_to_text",
    "total_years_experience",
]
