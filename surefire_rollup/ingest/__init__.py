"""Report ingestors for the surefire rollup."""
