"""
surveymap: headless core of the survey observation map.

Provides:
- Survey types, survey parts and rating tables (surveys/)
- Multi-part score aggregation and point colouring (surveys/scoring)
- Age-based colour decay (decay)
- Viewport-aware fetch cache and bounds (geo/)
- Observation fetch client (ingest/)
- In-memory observation store (storage/)
- Render selection and marker sinks (render)
- Session coordinator (controller)
"""
