"""Sender implementations.

Bounded Context: Document Delivery
"""
