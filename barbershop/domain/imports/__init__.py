"""Imports domain - bulk reservation import from CSV"""
