"""SafeTrade community insights — trends, analytics and alert level.

Modules
───────
  catalog_cache     — TTL cache for the catalog snapshot
  catalog_client    — Catalog Service contract + HTTP client
  catalog_resolver  — catalog id <-> name with default fallback
  trends            — attack-type / impact distributions over a window
  analytics         — community counters over all reports
  alert_classifier  — green / yellow / red decision table
  transformer       — normalized <-> legacy report and filter shapes
  store             — Report Store contract, loaders, in-memory store
  settings          — config/community.yaml
  service           — facade used by the presentation layer
  reporter          — write JSON, CSV, TXT outputs
  cli               — argparse entry-point
"""
