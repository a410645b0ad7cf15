"""Default comment templates and AI prompts."""

from __future__ import annotations

DEFAULT_VERSION = "1.0.0"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SYMBOL_KINDS: tuple[str, ...] = ("class", "method", "field")

DEFAULT_TEMPLATES: dict[str, str] = {
    "class": """/**
 * {{ description }}
 *
{% for param in parameters %}
 * @param {{ param.name }} {{ param.description }}
{% endfor %}
 * @author {{ author }}
 * @date {{ date }}
 * @version {{ version }}
 * @since {{ since }}
 */
""",
    "method": """/**
 * {{ description }}
 *
{% for param in parameters %}
 * @param {{ param.name }} {{ param.description }}
{% endfor %}
{% if return_type %}
 * @return {{ return_type_simple }}
{% endif %}
{% for exception in exceptions %}
 * @throws {{ exception }}
{% endfor %}
 * @author {{ author }}
 * @date {{ date }}
 * @version {{ version }}
 */
""",
    "field": """/**
 * The {{ field_name }}.
 */
""",
}

_OUTPUT_RULES = """Produce a standard Javadoc comment from the comment template and the context parameters.

Output requirements:
1. Use plain UTF-8 text. Never emit unicode escapes such as \\u003c.
2. Write angle brackets and quotes directly.
3. Start the comment with /** and end it with */.
4. Return only the Javadoc comment. No code fences, no code.
5. Separate paragraphs with <p>.
6. Keep every description line under 80 characters and prefix each line with "* ".
7. Keep every @ tag of the template. Do not invent tags for parameters that do not exist.
"""

DEFAULT_PROMPTS: dict[str, str] = {
    "class": _OUTPUT_RULES
    + """
Content:
Replace the description of the template with
1. one sentence summarising what the class is for,
2. after <p>, the main responsibilities, one "- " bullet per line,
3. after <p>, a short usage example.
Do not describe individual methods or fields.

Comment template:
{template}

Context parameters:
{context}

Code:
{code}
""",
    "method": _OUTPUT_RULES
    + """
Content:
Replace the description of the template with
1. one sentence summarising what the method does,
2. after <p>, its steps, one "- " bullet per line.
Describe each @param, the @return value and each @throws condition briefly.
Do not explain the internals of methods it calls.

Comment template:
{template}

Context parameters:
{context}

Code:
{code}
""",
    "field": _OUTPUT_RULES
    + """
Content:
Replace the description of the template with one short sentence saying what the field holds.

Comment template:
{template}

Context parameters:
{context}

Code:
{code}
""",
}

SYSTEM_PROMPT = (
    "You are a senior Java developer writing Javadoc. Stay grounded in the code you are given "
    "and answer with a single Javadoc comment."
)


__all__ = [
    "DEFAULT_DATE_FORMAT",
    "DEFAULT_PROMPTS",
    "DEFAULT_TEMPLATES",
    "DEFAULT_VERSION",
    "SYMBOL_KINDS",
    "SYSTEM_PROMPT",
]
