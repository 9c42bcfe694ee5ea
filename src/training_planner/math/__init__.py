"""Pure calculations: performance, training load, run patterns, zones, fitness assessment."""
