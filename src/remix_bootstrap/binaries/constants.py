"""Release coordinates and API constants."""

# GitHub URL structure
GITHUB_API_BASE = "https://api.github.com"
GITHUB_DOWNLOAD_BASE = "https://github.com"
GITHUB_REPOS_PATH = "repos"
RELEASES_PATH = "releases"
LATEST_PATH = "latest"
DOWNLOAD_PATH = "download"

# remix-browser repository constants
REMIX_OWNER = "hkd987"
REMIX_REPO = "remix-browser"
DEFAULT_REPOSITORY = f"{REMIX_OWNER}/{REMIX_REPO}"

BINARY_NAME = "remix-browser"
APP_NAME = "remix-browser"

SYSTEM_BIN_DIR = "/usr/local/bin"
USER_BIN_DIR = (".local", "bin")

# Where cargo leaves a release build, relative to the project dir
CARGO_MANIFEST = "Cargo.toml"
CARGO_RELEASE_DIR = ("target", "release")
