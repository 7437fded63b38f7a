"""Interceptor, progress and watcher callback patterns."""


class HttpClient:
    def __init__(self, base_url=""):
        self.base_url = base_url
        self.interceptors = {"request": [], "response": [], "error": []}

    def on_request(self, callback):
        self.interceptors["request"].append(callback)

    def on_response(self, callback):
        self.interceptors["response"].append(callback)

    def on_error(self, callback):
        self.interceptors["error"].append(callback)

    def get(self, url, options=None):
        full_url = self.base_url + url
        request = {"method": "GET", "url": full_url, **(options or {})}

        for interceptor in self.interceptors["request"]:
            interceptor(request)

        if "/error" in url:
            error = ConnectionError("Network error")
            for interceptor in self.interceptors["error"]:
                interceptor(str(error), request)
            raise error

        response = {
            "status": 200,
            "data": {"message": "success", "url": full_url},
            "config": request,
        }
        for interceptor in self.interceptors["response"]:
            interceptor(response)
        return response


class BatchProcessor:
    def __init__(self):
        self.callbacks = {"progress": None, "complete": None, "error": None}

    def on_progress(self, callback):
        self.callbacks["progress"] = callback
        return self

    def on_complete(self, callback):
        self.callbacks["complete"] = callback
        return self

    def on_error(self, callback):
        self.callbacks["error"] = callback
        return self

    def process_items(self, items):
        results = []
        try:
            for index, item in enumerate(items, start=1):
                if self.callbacks["progress"]:
                    self.callbacks["progress"](
                        {
                            "current": index,
                            "total": len(items),
                            "item": item,
                            "percent": round(index / len(items) * 100),
                        }
                    )
                if item == "error":
                    raise ValueError(f"Failed to process item: {item}")
                results.append(f"processed_{item}")

            if self.callbacks["complete"]:
                self.callbacks["complete"](results)
            return results
        except ValueError as e:
            if self.callbacks["error"]:
                self.callbacks["error"](str(e), results)
            raise


class FileWatcher:
    def __init__(self, path):
        self.path = path
        self.listeners = {}
        self.is_watching = False

    def on(self, event, callback):
        self.listeners.setdefault(event, []).append(callback)
        return self

    def start(self):
        self.is_watching = True
        self.emit("start", self.path)
        self.emit("ready", ["file1.txt", "file2.txt"])
        return self

    def stop(self):
        self.is_watching = False
        self.emit("stop", self.path)
        return self

    def simulate_change(self, filename, event_type="change"):
        if self.is_watching:
            self.emit(event_type, filename, {"size": 1024})

    def emit(self, event, *args):
        for callback in self.listeners.get(event, []):
            callback(*args)
