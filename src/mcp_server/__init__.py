"""
MCP server exposing the Perplexity search tools.
"""
