"""
habitlog core package.

A console habit tracker built around a small SQLite store:
- Typed habit entries (`habitlog.models`)
- Input sanitization and date normalization (`habitlog.validation`)
- Schema, seeding and CRUD over the entries table (`habitlog.database`)
- A keypress-driven menu shell (`habitlog.cli`)

Configuration:
- Filesystem anchors and fixed constants live in `habitlog.global_config`.
"""
