"""Deterministic script openers, three per tone."""
from __future__ import annotations

SCRIPT_TEMPLATES: dict[str, tuple[str, ...]] = {
    "professional": (
        "Opening: This overview of {prompt} sets out what matters for teams working in the field today.",
        "Summary: We look at {prompt} from a strategic angle, with clear takeaways and measurable outcomes.",
        "Perspective: Getting {prompt} right takes a considered approach grounded in data and experience.",
    ),
    "casual": (
        "Hi everyone! Let's talk about {prompt} in plain words, no jargon required.",
        "Quick one today: {prompt}. It's more interesting than it sounds, stick around.",
        "So, {prompt}. Let's keep it simple and have some fun with it.",
    ),
    "humorous": (
        "{prompt} walked into our studio and asked for a script. Here it is, jokes included.",
        "Heads up: this piece on {prompt} may cause sudden understanding and the odd laugh.",
        "People say {prompt} is complicated. People also said that about folding fitted sheets.",
    ),
    "inspirational": (
        "Every big change starts small. Your path into {prompt} starts right here.",
        "Picture a world where {prompt} is not just understood but mastered. It starts with you.",
        "The real power of {prompt} is what it makes possible. Let's go find out together.",
    ),
    "educational": (
        "Goal: by the end of this session on {prompt} you will know the core ideas and how to apply them.",
        "Part one: an introduction to {prompt}, starting from the basics and building up step by step.",
        "This lesson on {prompt} walks through the essentials with worked examples along the way.",
    ),
}


def render_variations(prompt: str, tone: str) -> list[str]:
    templates = SCRIPT_TEMPLATES.get(tone, SCRIPT_TEMPLATES["professional"])
    return [template.format(prompt=prompt) for template in templates]
