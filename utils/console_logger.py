import sys
import time


def safe_print(*args, **kwargs) -> None:
    sep = kwargs.pop("sep", " ")
    end = kwargs.pop("end", "\n")
    file = kwargs.pop("file", sys.stdout)
    flush = kwargs.pop("flush", False)

    text = sep.join(str(arg) for arg in args) + end
    try:
        file.write(text)
    except UnicodeEncodeError:
        encoding = getattr(file, "encoding", None) or "utf-8"
        safe_text = text.encode(encoding, errors="backslashreplace").decode(
            encoding, errors="ignore"
        )
        file.write(safe_text)
    if flush:
        file.flush()


def log(msg, callback=None) -> None:
    """Prints to console AND forwards to the UI if a callback exists"""
    safe_print(msg)
    if callback:
        callback(msg)


def file_logger(log_path):
    """Returns a callback that appends timestamped lines to `log_path` and prints them."""

    def _write(msg):
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        formatted_msg = f"[{timestamp}] {msg}"
        safe_print(formatted_msg)
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(formatted_msg + "\n")

    return _write
