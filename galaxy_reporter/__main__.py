# galaxy_reporter/__main__.py
from galaxy_reporter.main import session_main

if __name__ == "__main__":
    session_main()
