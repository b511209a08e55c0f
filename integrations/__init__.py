"""
Upstream integrations: supplier feed, Shopify GraphQL, notification sinks.
"""
