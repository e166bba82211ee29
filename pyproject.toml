[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "il2pmodem"
version = "0.1.0"
description = "AX.25 and IL2P framing for packet radio: CRC, Hamming, Reed-Solomon, twist filter and IL2P encode/decode"
requires-python = ">=3.10"
dependencies = []
keywords = ["ax25", "il2p", "packet-radio", "reed-solomon", "hamming", "crc", "ham-radio"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["il2pmodem"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
