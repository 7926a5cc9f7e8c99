"""GPX Mapper - turn a directory of GPX tracks into a static route map site."""

__version__ = "1.0.0"
