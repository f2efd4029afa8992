"""Scripted replies used when no completion is needed or available.

Everything here is static data keyed by ``Stage`` and ``RoleCategory``. The
tables cover every enum member, including ``unknown`` and ``general``, so
lookups from the controller never miss.
"""

from typing import Dict, Optional, Tuple

from .models import (
    KNOWN_STAGES,
    RETRY_TOKEN,
    ROLE_TOKEN_PREFIX,
    STAGE_TOKEN_PREFIX,
    QuickAction,
    RoleCategory,
    Stage,
)

AGENT_NAME = "AURORA"

STAGE_LABELS: Dict[Stage, str] = {
    Stage.EXPLORING: "🧭 Exploring options",
    Stage.APPLIED: "📨 Applied, waiting to hear back",
    Stage.INTERVIEWING: "🎤 Interviewing",
    Stage.OFFERED: "🤝 Got an offer",
    Stage.NEW_HIRE: "🚀 Starting a new role",
    Stage.PROFESSIONAL: "💼 Working professional",
    Stage.UNKNOWN: "🤔 Not sure yet",
}

ROLE_LABELS: Dict[RoleCategory, str] = {
    RoleCategory.SOFTWARE_ENGINEERING: "💻 Software engineering",
    RoleCategory.DATA_SCIENCE: "📊 Data science",
    RoleCategory.PRODUCT_MANAGEMENT: "🗺️ Product management",
    RoleCategory.OPERATIONS: "⚙️ Operations",
    RoleCategory.DESIGN: "🎨 Design",
    RoleCategory.MARKETING: "📣 Marketing",
    RoleCategory.FINANCE: "💰 Finance",
    RoleCategory.GENERAL: "🌐 Something else",
}

# What a user implicitly says by tapping a stage option.
STAGE_STATEMENTS: Dict[Stage, str] = {
    Stage.EXPLORING: "I'm exploring career options",
    Stage.APPLIED: "I've applied to some jobs and I'm waiting to hear back",
    Stage.INTERVIEWING: "I'm preparing for interviews",
    Stage.OFFERED: "I've received a job offer",
    Stage.NEW_HIRE: "I'm starting a new role",
    Stage.PROFESSIONAL: "I'm a working professional looking to grow",
    Stage.UNKNOWN: "I'm not sure where I am yet",
}


def stage_token(stage: Stage) -> str:
    return f"{STAGE_TOKEN_PREFIX}{stage.value}"


def role_token(role: RoleCategory) -> str:
    return f"{ROLE_TOKEN_PREFIX}{role.value}"


def stage_action(stage: Stage) -> QuickAction:
    return QuickAction(label=STAGE_LABELS[stage], token=stage_token(stage))


def role_action(role: RoleCategory) -> QuickAction:
    return QuickAction(label=ROLE_LABELS[role], token=role_token(role))


def _ask(label: str) -> QuickAction:
    """A quick action whose token is its own label, sent as plain chat."""
    return QuickAction(label=label, token=label)


STAGE_MENU: Tuple[QuickAction, ...] = tuple(stage_action(stage) for stage in KNOWN_STAGES)

ROLE_MENU: Tuple[QuickAction, ...] = tuple(
    role_action(role) for role in RoleCategory if role is not RoleCategory.GENERAL
)

GREETING_TEMPLATE = """Hi {name}! 👋 I'm {agent}, your AI career agent.

I'm here to help you navigate your career journey with personalized, actionable guidance.

**Where are you in your career journey right now?**"""

FALLBACK_TEXT = """I'm having trouble reaching my knowledge service right now, but I can still help you get moving.

**A few things that help at almost any stage:**
1. Write down the role you're aiming for and the three skills it asks for most.
2. Update your resume so every bullet shows an outcome, not just a duty.
3. Reach out to one person already doing the work you want.

Tap **Try again** to resend your last message, or tell me where you are so I can tailor my advice."""

FALLBACK_ACTIONS: Tuple[QuickAction, ...] = (
    QuickAction(label="🔄 Try again", token=RETRY_TOKEN),
    stage_action(Stage.EXPLORING),
    stage_action(Stage.INTERVIEWING),
    stage_action(Stage.PROFESSIONAL),
)

# Shown until the user sends a first message; the token is the chat text sent
SUGGESTED_PROMPTS: Tuple[QuickAction, ...] = (
    QuickAction(
        label="Analyze my resume", token="I'd like to upload my resume for analysis"
    ),
    QuickAction(
        label="Practice interview",
        token="Help me prepare for a software engineering interview at Google",
    ),
    QuickAction(
        label="Career roadmap",
        token="Create a personalized career roadmap from Junior to Senior Developer",
    ),
    QuickAction(
        label="Job search tips",
        token="What are the best strategies for landing my first tech job?",
    ),
)

STAGE_WELCOMES: Dict[Stage, Tuple[str, Tuple[QuickAction, ...]]] = {
    Stage.EXPLORING: (
        """Exploring is a great place to start. 🧭

Let's narrow things down. Knowing which field pulls you most lets me suggest concrete roles, skills to build and first projects.

**Which area are you most curious about?**""",
        ROLE_MENU[:5] + (role_action(RoleCategory.GENERAL),),
    ),
    Stage.APPLIED: (
        """Waiting to hear back can be the hardest part. 📨

While applications are out, this is the best time to tighten your materials and keep your pipeline full.

**What would help most right now?**""",
        (
            _ask("Review my resume"),
            _ask("How do I follow up with a recruiter?"),
            _ask("How many applications should I send?"),
            _ask("Help me prepare before interviews start"),
        ),
    ),
    Stage.INTERVIEWING: (
        """Interviews are where preparation pays off most. 🎤

I can help you practice answers, structure your stories and plan for each round.

**Where should we start?**""",
        (
            _ask("Practice behavioral questions"),
            _ask("Prepare for a technical interview"),
            _ask("What questions should I ask the interviewer?"),
            _ask("How do I follow up after an interview?"),
        ),
    ),
    Stage.OFFERED: (
        """Congratulations on the offer! 🤝

Before you sign, let's make sure you understand the whole package and what's worth discussing. For specific legal or tax questions a qualified professional is the right call.

**What would you like to look at?**""",
        (
            _ask("How do I evaluate this offer?"),
            _ask("How should I approach negotiation?"),
            _ask("I'm comparing multiple offers"),
        ),
    ),
    Stage.NEW_HIRE: (
        """Congratulations on the new role! 🚀

The first few months set the tone. Let's plan how you'll learn fast, build relationships and deliver early wins.

**What's on your mind?**""",
        (
            _ask("Help me plan my first 90 days"),
            _ask("How do I build a good relationship with my manager?"),
            _ask("How can I get up to speed quickly?"),
            _ask("I'm feeling overwhelmed"),
        ),
    ),
    Stage.PROFESSIONAL: (
        """Great, let's talk about where you want to go next. 💼

Whether it's a promotion, a move into leadership or a change of direction, a clear plan makes the difference.

**What are you focused on?**""",
        (
            _ask("I want a promotion"),
            _ask("Moving into leadership"),
            _ask("Changing careers"),
            _ask("Growing my skills"),
            _ask("Improving work-life balance"),
        ),
    ),
    Stage.UNKNOWN: (
        """No problem, we'll figure it out together. 🤔

**Which of these sounds closest to where you are?**""",
        STAGE_MENU,
    ),
}


def greeting_text(display_name: Optional[str] = None) -> str:
    return GREETING_TEMPLATE.format(name=display_name or "there", agent=AGENT_NAME)


def welcome_for(stage: Stage) -> Tuple[str, Tuple[QuickAction, ...]]:
    return STAGE_WELCOMES[stage]
