"""
User Interface Package

Headless controllers behind each view of the portal. A rendering layer binds
its widgets to the state these controllers expose and calls their operations.

Components:
- components: Form and dashboard controllers
"""
