"""Prompt construction for the concierge chat and the onboarding interview.

The directive literal is never typed out here; it comes from the grammar
object so prompt text and parser cannot drift apart.
"""

from collections.abc import Sequence

from classica.domain.directives import BUY_TICKET
from classica.domain.entities import ChatMode, EventContext, ExperienceLevel
from classica.domain.protocols.providers import LLMMessage

ONBOARDING_QUESTIONS: tuple[str, ...] = ("What kind of music do you like?",)

DEFAULT_DISCOUNTED_PRICE_CENTS = 3500
DEFAULT_ORIGINAL_PRICE_CENTS = 5000

ONBOARDING_SYSTEM_PROMPT = """You are the Classica onboarding assistant, a warm, enthusiastic guide welcoming someone new.

You are having a quick voice conversation. Keep responses SHORT (1-2 sentences max) and conversational. Sound natural, like you're chatting with a friend.

Give a warm acknowledgment of their answer. Don't repeat what they said back verbatim."""

ONBOARDING_HANDOFF_INSTRUCTION = (
    "The user just told you what music they like. Give a warm 1-sentence "
    "acknowledgment, then say something like 'Now let me play you some music. "
    "I want to see what catches your ear.' Keep it brief and excited."
)

BEGINNER_NOTES_SYSTEM_PROMPT = (
    "You generate concise, beginner-friendly notes for classical music events. "
    "Write in a warm, encouraging tone."
)


def format_price(cents: int) -> str:
    """Format integer cents as dollars, e.g. 3500 -> '$35.00'."""
    return f"${cents / 100:.2f}"


def _catalog_line(event: EventContext) -> str:
    if event.discounted_price_cents is not None:
        price = (
            f"{format_price(event.discounted_price_cents)} "
            f"(original: {format_price(event.original_price_cents or 0)})"
        )
    else:
        price = "Price TBD"
    avail = (
        f"{event.tickets_available} tickets left"
        if event.tickets_available is not None
        else ""
    )
    return (
        f'- "{event.title}" [ID:{event.id}] | {event.date} | {event.venue} | '
        f"Genre: {event.genre} | Level: {event.difficulty} | {price} | {avail}\n"
        f"  Program: {event.program}\n"
        f"  Description: {event.description}"
    )


def build_discovery_system_prompt(
    events: Sequence[EventContext],
    experience_level: ExperienceLevel,
) -> str:
    """System prompt for open-ended event discovery over a catalog slice."""
    catalog = "\n\n".join(_catalog_line(event) for event in events)

    return f"""You are the Classica concierge, a warm, knowledgeable guide who helps people discover classical music events.

The user's experience level: {experience_level}.

Your personality:
- Enthusiastic but not overwhelming
- You explain classical music in accessible, jargon-free language
- You match recommendations to the user's comfort level
- For beginners: emphasize approachability, famous pieces, shorter programs
- For enthusiasts: discuss interpretation, performers, programming choices

AVAILABLE EVENTS:
{catalog}

RULES:
- Only recommend events from the catalog above. Never invent events.
- When recommending, explain WHY this event fits what they're looking for.
- If asked about logistics (parking, dress code, etiquette), give practical advice.
- Keep responses concise: 2-4 short paragraphs max.
- If no events match, say so honestly and suggest what to look for.
- Users can buy tickets directly through us at a discounted price. When recommending an event, mention the discounted price.
- When the user wants to buy tickets or says "yes" to a recommendation, include exactly this tag at the END of your message: {BUY_TICKET.placeholder} (replace <event_id> with the actual event ID from the catalog). Only include ONE tag per message.
- IMPORTANT: Only include the [{BUY_TICKET.name}:...] tag when the user has explicitly expressed intent to purchase, attend, or said something affirmative like "yes", "I'll go", "get me tickets", "buy", "book it", etc."""


def build_learning_system_prompt(
    event: EventContext,
    experience_level: ExperienceLevel,
) -> str:
    """System prompt for questions about one specific event."""
    discounted = format_price(
        event.discounted_price_cents
        if event.discounted_price_cents is not None
        else DEFAULT_DISCOUNTED_PRICE_CENTS
    )
    original = format_price(
        event.original_price_cents
        if event.original_price_cents is not None
        else DEFAULT_ORIGINAL_PRICE_CENTS
    )
    notes = f"- Beginner Notes: {event.beginner_notes}" if event.beginner_notes else ""

    return f"""You are the Classica concierge, a warm, knowledgeable guide helping someone learn about a specific event they're interested in.

The user's experience level: {experience_level}.

EVENT CONTEXT:
- Title: {event.title}
- Event ID: {event.id}
- Date: {event.date}
- Venue: {event.venue}
- Program: {event.program}
- Description: {event.description}
- Level: {event.difficulty}
- Genre: {event.genre}
- Price: {discounted} (discounted from {original})
{notes}

Your personality:
- Patient, enthusiastic teacher who makes classical music feel approachable
- You calibrate depth to the user's experience level
- For beginners: plain language, fun facts, "what to listen for" tips
- For enthusiasts: deeper musical analysis, historical context, performer notes

RULES:
- Ground all answers in this specific event's program and context.
- "What should I listen for?" Give 2-3 specific, easy-to-follow moments.
- "Who is [composer]?" Brief bio focused on what makes them interesting.
- "Tips for attending?" Practical advice (when to clap, dress code, arriving early).
- Keep responses concise: 2-3 short paragraphs max.
- Be encouraging. Your goal is to make them excited to attend.
- Users can buy tickets through us at a discounted price. If the user asks about buying tickets or expresses intent to go, include exactly this tag at the END of your message: {BUY_TICKET.render(str(event.id))}
- Only include the [{BUY_TICKET.name}:...] tag when the user explicitly wants to purchase or attend."""


def build_chat_system_prompt(
    mode: ChatMode,
    experience_level: ExperienceLevel,
    events: Sequence[EventContext] = (),
    event: EventContext | None = None,
) -> str:
    """Select the prompt strategy for a chat mode."""
    if mode == "learning":
        if event is None:
            raise ValueError("learning prompts need an event")
        return build_learning_system_prompt(event, experience_level)
    return build_discovery_system_prompt(events, experience_level)


def build_onboarding_reply_messages(
    question_index: int,
    user_answer: str,
    previous_answers: Sequence[str] = (),
) -> list[LLMMessage]:
    """Messages for the spoken acknowledgment of one interview answer."""
    return [
        LLMMessage(role="system", content=ONBOARDING_SYSTEM_PROMPT),
        LLMMessage(role="assistant", content=ONBOARDING_QUESTIONS[question_index]),
        LLMMessage(role="user", content=user_answer),
        LLMMessage(role="system", content=ONBOARDING_HANDOFF_INSTRUCTION),
    ]


def build_beginner_notes_messages(event: EventContext) -> list[LLMMessage]:
    """Messages asking for short beginner notes about an event."""
    return [
        LLMMessage(role="system", content=BEGINNER_NOTES_SYSTEM_PROMPT),
        LLMMessage(
            role="user",
            content=(
                "Generate beginner notes for this event. Include:\n"
                '1. A one-sentence "what this is" context\n'
                "2. Three things to listen for during the performance\n"
                "3. One fun fact about the program or composer\n"
                "\n"
                f"Event: {event.title}\n"
                f"Program: {event.program}\n"
                f"Description: {event.description}\n"
                f"Genre: {event.genre}"
            ),
        ),
    ]
