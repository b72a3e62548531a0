"""Bundled JSON contracts, resolved by :func:`contract_engine.loader.load_schema`."""
