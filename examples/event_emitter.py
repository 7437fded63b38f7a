"""Callback-driven classes: listeners registered by name or per hook."""


class EventEmitter:
    def __init__(self):
        self.listeners = {}

    def on(self, event, callback):
        self.listeners.setdefault(event, []).append(callback)

    def emit(self, event, *args):
        for callback in self.listeners.get(event, []):
            callback(*args)

    def do_something(self):
        self.emit("start", "processing")
        result = "completed"
        self.emit("finish", result, 42)
        return result

    def process_data(self, data):
        self.emit("before_process", data)
        processed = data.upper()
        self.emit("after_process", processed)
        return processed


class TaskManager:
    def __init__(self):
        self.callbacks = {}

    def on_start(self, callback):
        self.callbacks["start"] = callback

    def on_complete(self, callback):
        self.callbacks["complete"] = callback

    def on_error(self, callback):
        self.callbacks["error"] = callback

    def execute_task(self, task_name):
        if "start" in self.callbacks:
            self.callbacks["start"](task_name)

        if task_name == "fail":
            if "error" in self.callbacks:
                self.callbacks["error"]("Task failed", task_name)
            raise RuntimeError("Task failed")

        result = f"{task_name} completed"
        if "complete" in self.callbacks:
            self.callbacks["complete"](result, task_name)
        return result

    def run_batch(self, tasks):
        results = []
        for task in tasks:
            try:
                results.append(self.execute_task(task))
            except RuntimeError:
                # The error callback has already seen it
                results.append(None)
        return results
