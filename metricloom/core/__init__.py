"""metricloom core: registry, grammar bindings, parser, spaces, metrics and dispatch."""
