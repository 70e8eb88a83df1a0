"""Domain packages: booking rules plus one package per resource"""
