"""
Chat and push relay backend.

This package provides a FastAPI application that relays chat messages to an
LLM completion API, forwards push notifications through Firebase Cloud
Messaging and OneSignal, and proxies image edits to Replicate.
"""
