"""legaldoc: LLM-backed analysis of long legal documents.

- `legaldoc.llm`: text service clients and the chunked call orchestrator
- `legaldoc.transform`: structure-preserving JSON transforms (translation)
- `legaldoc.storage`: artifact storage on Cloud Storage or local disk
"""
