"""Utility modules for cardpack."""
