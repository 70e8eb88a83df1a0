"""Reservations domain - booking, moving and cancelling appointments"""
