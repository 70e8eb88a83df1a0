"""Routers that sit outside the domain packages"""
