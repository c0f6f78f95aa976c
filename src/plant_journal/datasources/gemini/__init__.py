"""Google Gemini data source.

Text generation (plant description, weather lookup, care insights), image
analysis (color, leaf count, infections, growth stage) and image generation
(next-day prediction) through the ``generateContent`` REST endpoint.

Public API:
  - client: generate_content, response_text, response_image, part builders
  - prompts: prompt templates per analysis
"""

from plant_journal.datasources.gemini import prompts
from plant_journal.datasources.gemini.client import (
    GEMINI_API,
    GOOGLE_SEARCH_TOOL,
    generate_content,
    image_part,
    response_image,
    response_text,
    text_part,
)

__all__ = [
    "GEMINI_API",
    "GOOGLE_SEARCH_TOOL",
    "generate_content",
    "image_part",
    "prompts",
    "response_image",
    "response_text",
    "text_part",
]
