"""Routers HTTP por feature (sessions, users, carts, orders, products, questions)."""
