import json

import pytest


GETBLOCK = {
    "name": "getblock",
    "description": "Get block information",
    "examples": "",
    "argument_names": ["blockhash", "verbosity"],
    "arguments": [
        {
            "names": ["blockhash"],
            "description": "The block hash",
            "oneline_description": "",
            "also_positional": False,
            "type_str": None,
            "required": True,
            "hidden": False,
            "type": "string",
        },
        {
            "names": ["verbosity", "verbose"],
            "description": "0 for hex-encoded data, 1 for a JSON object",
            "required": False,
            "type": "number",
        },
    ],
    "results": [
        {
            "type": "object",
            "optional": True,
            "description": "Block information",
            "skip_type_check": False,
            "key_name": "",
            "condition": "",
            "inner": [
                {
                    "type": "string",
                    "optional": False,
                    "description": "Inner result",
                    "skip_type_check": False,
                    "key_name": "inner_key",
                    "condition": "",
                    "inner": [],
                }
            ],
        },
        {
            "type": "string",
            "description": "Hex-encoded block data",
            "condition": "for verbosity = 0",
        },
    ],
}

SIMPLE_METHOD = {
    "name": "simple_method",
    "description": "A simple method",
    "examples": "",
    "argument_names": [],
    "arguments": [],
    "results": [],
}


@pytest.fixture
def getblock_doc():
    return {"rpcs": {"getblock": json.loads(json.dumps(GETBLOCK))}}


@pytest.fixture
def write_json(tmp_path):
    def _write(doc, name="api.json"):
        p = tmp_path / name
        p.write_text(doc if isinstance(doc, str) else json.dumps(doc), encoding="utf-8")
        return p
    return _write


@pytest.fixture
def api_file(write_json, getblock_doc):
    getblock_doc["rpcs"]["simple_method"] = dict(SIMPLE_METHOD)
    return write_json(getblock_doc)
