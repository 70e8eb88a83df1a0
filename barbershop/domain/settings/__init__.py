"""Settings domain - business hours, working days and services"""
