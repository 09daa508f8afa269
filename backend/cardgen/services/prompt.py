"""Prompt construction for the card and edit flows."""
from cardgen.models.card import OccasionConfig

CARD_LAYOUT = "FLAT 2:1 wide image (texture atlas for 3D UV mapping)"


def default_greeting(config: OccasionConfig) -> str:
    return f"Wishing you a wonderful {config.name}!"


def build_card_prompt(
    config: OccasionConfig,
    recipient_name: str = "",
    sender_name: str = "",
    greeting: str = "",
    custom_instructions: str = "",
) -> str:
    """Build the instruction block sent with the selfie.

    The card is one flat 2:1 image: left half is the front cover, right half
    the inside. User-supplied text is interpolated as-is.

    Args:
        config: Occasion wording (scene, interior, attire, decorations, title).
        recipient_name: Adds ``and "Dear {name}"`` to the cover title when set.
        sender_name: Adds a ``With love`` signature inside when set.
        greeting: Inside greeting; defaults to "Wishing you a wonderful {name}!".
        custom_instructions: Appended as a special-instructions trailer when set.

    Returns:
        Prompt string for the image model.
    """
    greeting = greeting or default_greeting(config)
    recipient_line = f' and "Dear {recipient_name}"' if recipient_name else ""
    sender_line = f'- At bottom: "With love, {sender_name}"' if sender_name else ""

    prompt = f"""IMPORTANT: You MUST include ALL people visible in the uploaded photo. Preserve EVERY person's exact face, appearance, and features. Do NOT leave anyone out. Do NOT generate different people.

Create a {config.name} card layout as a {CARD_LAYOUT}.

ABSOLUTE REQUIREMENTS:
1. INCLUDE EVERYONE - ALL people from the uploaded photo must appear in the card
2. PRESERVE FACES - Each person's exact face, hair, and features must match the uploaded photo
3. FLAT IMAGE - No 3D perspective, no fold lines, completely flat like a printed poster
4. TWO EQUAL HALVES - Left half is front cover, right half is inside

LEFT HALF (FRONT COVER):
- Feature ALL THE SAME PEOPLE from the uploaded photo together in a {config.scene}
- Keep everyone's exact faces and features - just enhance the setting
- Dress them in {config.attire}
- Arrange the people naturally as a group/family portrait
- Text at top: "{config.default_title}"{recipient_line}

RIGHT HALF (INSIDE OF CARD):
- {config.interior}
- Include this greeting text: "{greeting}"
{sender_line}
- Decorative borders with {config.decorations}

STYLE: Beautiful {config.name} colors and atmosphere, photorealistic integration of ALL people, professional greeting card quality.

CRITICAL: Include EVERY person from the photo - do not omit anyone. This is a family/group card."""

    if custom_instructions:
        prompt += (
            "\n\nSPECIAL INSTRUCTIONS FROM USER (follow these carefully):\n"
            f"{custom_instructions}"
        )
    return prompt


def build_edit_prompt(edit_instructions: str) -> str:
    """Build the instruction block sent with an existing card image."""
    return f"""This is an existing greeting card image. Please modify it according to these instructions while keeping everything else the same:

EDIT REQUEST: {edit_instructions}

IMPORTANT:
- Keep the same overall layout (left half = front cover, right half = inside)
- Preserve all people's faces and appearances exactly as they are
- Only change what is specifically requested
- Maintain the flat 2:1 aspect ratio for UV mapping
- Keep text readable and properly positioned"""
