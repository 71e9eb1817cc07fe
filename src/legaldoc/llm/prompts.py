"""Prompt templates for legal document operations.

Every JSON-returning prompt spells out the exact shape expected back; the
matching JSON Schemas live next to it so parsing and validation stay in
one place.
"""

SUMMARIZE = "Summarize the following legal text clearly and concisely:\n\n{text}"

MERGE_SUMMARIES = (
    "Combine the following {count} partial summaries into one clear, "
    "coherent summary:\n\n{summaries}"
)

ASK = """Answer the following question based strictly on the legal text below.
Return ONLY plain text (no JSON needed).

Text:
{text}

Question: {question}"""

COMPARE = """Compare these two legal documents and highlight key differences and similarities.
Return plain text (bullet points are fine).

Document 1:
{text_a}

Document 2:
{text_b}"""

TRANSLATE = """Translate the following legal text into {language}.
Preserve meaning, accuracy, and tone. Return only the translation.

{text}"""

KEY_TERMS = """Extract and define the key legal terms from the following text.
Return ONLY valid JSON in this format:

[
  {{ "term": "Party A", "definition": "The buyer company" }},
  {{ "term": "Indemnity", "definition": "Obligation to compensate for damages" }}
]

Text:
{text}"""

LEGAL_ISSUES = """Identify potential legal issues in the document.
Return ONLY valid JSON in this format:

[
  {{ "issue": "Ambiguous termination clause", "explanation": "Termination conditions are vague" }},
  {{ "issue": "Missing dispute resolution clause", "explanation": "No mechanism for arbitration or litigation" }}
]

Text:
{text}"""

CLAUSES = """Analyze the contract clauses in this document.
For each clause, return ONLY valid JSON in this format:

[
  {{
    "clause": "Termination",
    "purpose": "Specifies conditions under which the contract may end",
    "risk": "Ambiguous language may favor one party",
    "suggestion": "Clarify notice period and mutual rights"
  }}
]

Text:
{text}"""

ANALYZE = """You are a legal assistant. Analyze the following document and return a structured JSON with:
- summary (5-10 bullet points),
- important clauses (with clause name and short explanation),
- potential risks (if any),
- obligations (what parties must do),
- missing elements (if relevant).

Document:
\"\"\"
{text}
\"\"\"

Return ONLY valid JSON in this format:

{{
  "summary": ["The lease runs for two years"],
  "clauses": [{{ "name": "Termination", "explanation": "Either party may end the lease with 60 days' notice" }}],
  "risks": ["No cap on late fees"],
  "obligations": ["Tenant pays rent by the 1st of each month"],
  "missing_elements": ["Dispute resolution clause"]
}}"""

COMPREHENSIVE = """Perform a comprehensive legal analysis of this document.
Return ONLY valid JSON in this format:

{{
  "documentType": "Employment Agreement",
  "parties": ["Employer", "Employee"],
  "obligations": "Employer provides salary, Employee provides services",
  "deadlines": "30 days' notice for termination",
  "risks": ["Ambiguous non-compete clause"],
  "recommendations": ["Clarify scope of non-compete"],
  "overallAssessment": "Generally balanced but with some ambiguities"
}}

Text:
{text}"""


def _list_of(*fields: str) -> dict:
    return {
        "type": "array",
        "items": {
            "type": "object",
            "properties": {f: {"type": "string"} for f in fields},
            "required": list(fields),
        },
    }


KEY_TERMS_SCHEMA = _list_of("term", "definition")
LEGAL_ISSUES_SCHEMA = _list_of("issue", "explanation")
CLAUSES_SCHEMA = _list_of("clause", "purpose", "risk", "suggestion")

_STRING_OR_LIST = {
    "anyOf": [{"type": "string"}, {"type": "array", "items": {"type": "string"}}]
}

COMPREHENSIVE_SCHEMA = {
    "type": "object",
    "properties": {
        "documentType": {"type": "string"},
        "parties": {"type": "array", "items": {"type": "string"}},
        "obligations": _STRING_OR_LIST,
        "deadlines": _STRING_OR_LIST,
        "risks": {"type": "array", "items": {"type": "string"}},
        "recommendations": {"type": "array", "items": {"type": "string"}},
        "overallAssessment": {"type": "string"},
    },
    "required": ["documentType", "parties", "risks", "overallAssessment"],
}

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "summary": _STRING_LIST,
        "clauses": _list_of("name", "explanation"),
        "risks": _STRING_LIST,
        "obligations": _STRING_LIST,
        "missing_elements": _STRING_LIST,
    },
    "required": ["summary", "clauses", "risks", "obligations", "missing_elements"],
}
