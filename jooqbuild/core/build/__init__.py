"""Reference host build model — the engine the jOOQ plugin plugs into."""
