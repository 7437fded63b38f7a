"""Arithmetic helpers and a stateful calculator."""


def add(a, b):
    return a + b


def divide(a, b):
    if b == 0:
        raise ZeroDivisionError("Division by zero")
    return a / b


class Calculator:
    def __init__(self, initial=0):
        self.value = initial
        self.history = []

    def add(self, amount):
        self.value += amount
        self.history.append(f"add {amount}")
        return self.value

    def subtract(self, amount):
        self.value -= amount
        self.history.append(f"subtract {amount}")
        return self.value

    def divide(self, amount):
        self.value = divide(self.value, amount)
        self.history.append(f"divide {amount}")
        return self.value

    def describe(self):
        return f"Calculator({self.value})"
