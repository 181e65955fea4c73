"""
Career Coach Backend.

Core components:
- tools: Apify scraper, Elasticsearch job index, Gemini completions
- agents: Career coach (question answering), job ingestion
- api: FastAPI routes
- models: Data models for profiles and jobs
"""
