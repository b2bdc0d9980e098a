import json
import logging

from storekeeper.logging_config import JsonFormatter, configure_logging


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="storekeeper.store", level=logging.INFO, pathname="store.py",
        lineno=1, msg="sale recorded", args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_merges_extra():
    line = JsonFormatter().format(make_record(extra={"sale_id": 3, "quantity": 4}))
    doc = json.loads(line)
    assert doc["message"] == "sale recorded"
    assert doc["level"] == "INFO"
    assert doc["sale_id"] == 3
    assert doc["quantity"] == 4
    assert doc["timestamp"].endswith("+00:00")


def test_configure_logging_writes_file(tmp_path):
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        configure_logging(str(tmp_path / "logs"))
        logging.getLogger("storekeeper.test").info("hello", extra={"extra": {"k": "v"}})
        for handler in root.handlers:
            handler.flush()
        text = (tmp_path / "logs" / "storekeeper.log").read_text()
        assert json.loads(text.splitlines()[-1])["k"] == "v"
        console = [h for h in root.handlers if type(h) is logging.StreamHandler]
        assert [h.level for h in console] == [logging.ERROR]
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved[0]:
            root.addHandler(handler)
        root.setLevel(saved[1])
