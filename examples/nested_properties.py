"""A class whose state and helpers live in nested dicts."""

import json


class UserManager:
    def __init__(self, initial_user=None):
        self.user = initial_user or {
            "profile": {
                "name": "John Doe",
                "age": 30,
                "preferences": {"theme": "dark", "language": "en"},
            },
            "account": {"id": 12345, "type": "premium", "balance": 100.50},
        }

        self.api = {
            "client": {
                "get": lambda endpoint: f"GET {endpoint}",
                "post": lambda endpoint, data: f"POST {endpoint} with {json.dumps(data, separators=(',', ':'))}",
            },
            "auth": {
                "login": lambda username, password: f"Logged in {username}",
                "logout": lambda: "Logged out",
            },
        }

        self.settings = {
            "ui": {"get_theme": self._get_theme, "set_theme": self._set_theme},
            "account": {"get_balance": self._get_balance, "add_balance": self._add_balance},
        }

    def _get_theme(self):
        return self.user["profile"]["preferences"]["theme"]

    def _set_theme(self, theme):
        self.user["profile"]["preferences"]["theme"] = theme
        return theme

    def _get_balance(self):
        return self.user["account"]["balance"]

    def _add_balance(self, amount):
        self.user["account"]["balance"] += amount
        return self.user["account"]["balance"]

    def update_user_name(self, new_name):
        self.user["profile"]["name"] = new_name
        return self.user["profile"]["name"]

    def upgrade_account(self):
        self.user["account"]["type"] = "premium+"
        self.user["account"]["balance"] += 50
        return self.user["account"]
