"""
Services layer - Business logic goes here.
Keep services focused on one concern each (store, pipeline, map, ...).

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- Only the domain store mutates reports, resources and zones
- AI assistance and alerts are optional side channels, never blockers
"""
