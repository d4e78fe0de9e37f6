import json
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--save-traces",
        action="store",
        nargs="?",
        const="traces_json",
        help="Save the traces of the checked computations to JSON files in the specified directory",
    )


@pytest.fixture
def save_traces_folder(request):
    return request.config.getoption("--save-traces")


@pytest.fixture
def save_trace(request, save_traces_folder):
    """Return a function saving a trace under the name of the running test, if `--save-traces` is set."""

    def _save_trace(trace: list[str], filename: str):
        if save_traces_folder:
            output_dir = Path("data") / save_traces_folder
            output_dir.mkdir(parents=True, exist_ok=True)
            json_file = output_dir / f"{filename}.json"

            data = {}

            if json_file.exists():
                with json_file.open("r") as f:
                    data = json.load(f)

            data[request.node.name] = list(trace)

            with json_file.open("w") as f:
                json.dump(data, f, indent=4)

    return _save_trace
