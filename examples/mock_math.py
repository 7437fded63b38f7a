"""Functions whose collaborators are passed in, so they can be mocked."""


def calculate_with_logger(a, b, logger):
    logger("info", f"Calculating {a} + {b}")
    result = a + b
    logger("debug", f"Result: {result}")
    return result


def process_data(data, validator, transformer):
    if not validator(data):
        raise ValueError("Invalid data")
    return transformer(data)


def fetch_or_default(url, fetcher, default=None):
    try:
        return fetcher(url)
    except Exception as e:
        return {"error": str(e), "default": default}
