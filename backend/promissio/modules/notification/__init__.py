"""Contract notifications.

Notifications are derived on every request from the contract collection and
a reference instant; they are never stored. The only state kept here is the
set of notification ids a user has already opened.
"""
