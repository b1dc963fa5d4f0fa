"""
Drawable flower variants and decorative emoji sets.

Variant identifiers follow the ``species-theme`` convention; the species is
everything before the first ``-``.
"""

FLOWER_THEMES = ("classic", "pastel", "sunset", "midnight", "meadow")

FLOWER_SPECIES = ("forgetmenot", "lily", "peony", "rose", "tulip", "sunflower")

FLOWER_CATALOG = tuple(
    f"{species}-{theme}" for species in FLOWER_SPECIES for theme in FLOWER_THEMES
)

ALWAYS_EMOJIS = ("🐝", "🦋", "🐞")

ROTATING_EMOJIS = ("🐌", "🐛", "🍄", "🌿", "🪺", "🐸", "🪨", "🍂")
