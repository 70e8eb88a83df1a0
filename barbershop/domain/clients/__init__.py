"""Clients domain - client records and booking history"""
