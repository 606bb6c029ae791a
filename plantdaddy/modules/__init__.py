"""
Feature modules of PlantDaddy.

- user_management: accounts and authentication
- households: sharing boundary, membership roles, invite codes, request scoping
- plant_care: plants, locations, species catalog, care history, watering status
- notifications: reminder settings, delivery channels, reminder sweep
"""
