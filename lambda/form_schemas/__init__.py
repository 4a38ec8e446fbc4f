"""Bundled Notion property schemas, one JSON file per route."""
