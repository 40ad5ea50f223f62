"""Event administration backend for Django."""
