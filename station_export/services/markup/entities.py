"""Character entity decoding for the small set the editor emits."""

# Applied in sequence, so "&amp;lt;" decodes all the way to "<"
ENTITY_TABLE = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&apos;", "'"),
    ("&nbsp;", " "),
    ("&#x27;", "'"),
    ("&#x2F;", "/"),
    ("&mdash;", "—"),
    ("&ndash;", "–"),
    ("&hellip;", "…"),
    ("&lsquo;", "‘"),
    ("&rsquo;", "’"),
    ("&ldquo;", "“"),
    ("&rdquo;", "”"),
)


def decode_entities(text: str) -> str:
    for entity, replacement in ENTITY_TABLE:
        text = text.replace(entity, replacement)
    return text
