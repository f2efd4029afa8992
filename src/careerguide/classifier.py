"""Keyword classification of free text into a career stage and role category.

Keyword sets overlap (an interview story often mentions the offer that
followed it), so each table is evaluated in its listed order and the first
label with a matching keyword wins. Later stages in the hiring lifecycle
come first for stages; narrower disciplines come first for roles.
"""

from typing import Optional, Tuple

from .models import RoleCategory, Stage

STAGE_KEYWORDS: Tuple[Tuple[Stage, Tuple[str, ...]], ...] = (
    (
        Stage.OFFERED,
        (
            "job offer",
            "an offer",
            "the offer",
            "offer letter",
            "counteroffer",
            "counter offer",
            "negotiat",
            "signing bonus",
        ),
    ),
    (
        Stage.INTERVIEWING,
        (
            "interview",
            "phone screen",
            "onsite",
            "on-site",
            "technical round",
            "take-home",
            "hiring manager",
            "recruiter call",
        ),
    ),
    (
        Stage.APPLIED,
        (
            "applied",
            "applying",
            "application",
            "submitted my",
            "waiting to hear",
            "haven't heard back",
            "ghosted",
            "rejected",
            "job search",
            "job hunt",
        ),
    ),
    (
        Stage.NEW_HIRE,
        (
            "new hire",
            "just started",
            "just joined",
            "starting a new job",
            "started a new job",
            "first day",
            "first week",
            "first 90 days",
            "onboarding",
            "probation",
        ),
    ),
    (
        Stage.PROFESSIONAL,
        (
            "years of experience",
            "years experience",
            "currently work",
            "my manager",
            "my team",
            "promotion",
            "leadership",
            "career growth",
            "director",
        ),
    ),
    (
        Stage.EXPLORING,
        (
            "explore",
            "exploring",
            "career options",
            "career path",
            "career change",
            "switch careers",
            "what should i do",
            "not sure what",
            "student",
            "graduating",
            "university",
            "college",
        ),
    ),
)

ROLE_KEYWORDS: Tuple[Tuple[RoleCategory, Tuple[str, ...]], ...] = (
    (
        RoleCategory.DATA_SCIENCE,
        (
            "data scien",
            "data analy",
            "data engineer",
            "machine learning",
            "deep learning",
            "statistic",
            "ai engineer",
        ),
    ),
    (
        RoleCategory.PRODUCT_MANAGEMENT,
        ("product manag", "product owner", "product strategy", "product roadmap"),
    ),
    (
        RoleCategory.DESIGN,
        ("designer", "ux design", "ux research", "ui/ux", "ux/ui", "figma", "user experience"),
    ),
    (
        RoleCategory.SOFTWARE_ENGINEERING,
        (
            "software",
            "developer",
            "engineer",
            "programming",
            "coding",
            "backend",
            "frontend",
            "full stack",
            "full-stack",
            "devops",
        ),
    ),
    (
        RoleCategory.MARKETING,
        ("marketing", "seo", "brand", "social media", "content strategy", "copywrit"),
    ),
    (
        RoleCategory.FINANCE,
        ("finance", "financial", "accounting", "accountant", "investment", "banking", "audit"),
    ),
    (
        RoleCategory.OPERATIONS,
        (
            "operations",
            "supply chain",
            "logistics",
            "project manag",
            "program manag",
            "procurement",
        ),
    ),
)


def detect_stage(text: str) -> Optional[Stage]:
    lowered = text.lower()
    for stage, keywords in STAGE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return stage
    return None


def detect_role(text: str) -> Optional[RoleCategory]:
    lowered = text.lower()
    for role, keywords in ROLE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return role
    return None


def classify(
    text: str, current_stage: Stage, current_role: RoleCategory
) -> Tuple[Optional[Stage], Optional[RoleCategory]]:
    """Infers stage and role from ``text`` for fields not yet known.

    Only an ``unknown`` stage and a ``general`` role are inferred; a field
    that is already set, or that matches no keyword, comes back as ``None``.
    The two dimensions are classified independently.
    """
    stage = detect_stage(text) if current_stage == Stage.UNKNOWN else None
    role = detect_role(text) if current_role == RoleCategory.GENERAL else None
    return stage, role
