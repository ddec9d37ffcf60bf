"""
Prompt templates for topic classification and entity extraction.

All prompts ask for a single JSON object; responses are parsed with
``json_utils.safe_parse_json`` and validated with the pydantic models.
"""

# Content sent to the model is bounded to this many characters.
MAX_PROMPT_CONTENT_CHARS = 4000
MAX_PATTERN_DOCUMENTS = 10
PATTERN_EXCERPT_CHARS = 500

COMMON_TOPICS = """- Affiliate Programs & Commissions
- Contracts & Agreements
- Legal Policies & Compliance
- Marketing & Advertising
- Product Information
- Financial Terms & Pricing
- Technical Documentation
- HR & Employment
- Customer Service
- Data Privacy & Security"""


CLASSIFY_TOPICS_PROMPT = """Analyze this document and classify it into relevant topics.

Existing Topics:
{topics_list}

Document Content:
{content}

Instructions:
1. Identify 1-3 main topics for this document
2. You can suggest new topics if the content doesn't fit existing ones
3. Provide confidence score (0-100) for each topic
4. Extract 5-10 relevant keywords per topic
5. Write a brief description for each topic

Common business topics include:
{common_topics}

Respond ONLY with valid JSON in this format:
{{
  "topics": [
    {{
      "topicName": "Affiliate Programs",
      "confidence": 95,
      "keywords": ["affiliate", "commission", "referral", "partner", "revenue"],
      "description": "Content related to affiliate marketing and commission structures"
    }}
  ]
}}"""


EXTRACT_ENTITIES_PROMPT = """Extract all important entities from this document:

{content}

Extract:
1. Numbers (amounts, quantities, percentages, etc.) with context
2. Regulations, laws, or compliance references with context
3. Important technical terms or jargon with context
4. Dates and deadlines with context
5. Percentages and ratios with context

Respond ONLY with valid JSON in this format:
{{
  "numbers": [
    {{"value": "5000", "context": "maximum payout amount", "unit": "USD"}}
  ],
  "regulations": [
    {{"value": "GDPR Article 17", "context": "right to erasure"}}
  ],
  "terms": [
    {{"value": "CPA", "context": "Cost Per Acquisition pricing model", "definition": "Cost Per Acquisition"}}
  ],
  "dates": [
    {{"value": "2024-12-31", "context": "contract expiration date"}}
  ],
  "percentages": [
    {{"value": "15%", "context": "commission rate for tier 1 affiliates"}}
  ]
}}"""


SECTION_PATTERNS_PROMPT = """Analyze these documents and identify recurring section headings or patterns:

{summaries}

Find:
1. Common section headings that appear across multiple documents
2. Typical document structures and patterns
3. Standard clauses or paragraphs

Respond ONLY with valid JSON in this format:
{{
  "patterns": [
    {{
      "heading": "Payment Terms",
      "frequency": 8,
      "exampleContent": "Payment shall be made within 30 days of invoice date..."
    }}
  ]
}}"""


def build_classify_prompt(content: str, topics_list: str) -> str:
    return CLASSIFY_TOPICS_PROMPT.format(
        topics_list=topics_list,
        content=content[:MAX_PROMPT_CONTENT_CHARS],
        common_topics=COMMON_TOPICS,
    )


def build_entities_prompt(content: str) -> str:
    return EXTRACT_ENTITIES_PROMPT.format(content=content[:MAX_PROMPT_CONTENT_CHARS])


def build_patterns_prompt(summaries: str) -> str:
    return SECTION_PATTERNS_PROMPT.format(summaries=summaries)
