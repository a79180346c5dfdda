"""mrel: version, build, publish and tag a JavaScript monorepo."""

__version__ = "0.1.0"
