"""Barbershop booking service"""
