"""Unit tests for the RESP client."""
