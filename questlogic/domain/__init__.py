"""
Domain Layer

Entities, the scoring engine and the ports the outer layers implement.
Nothing in here imports FastAPI, pydantic or pymongo.
"""
