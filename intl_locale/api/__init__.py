"""HTTP surface for locale negotiation."""
