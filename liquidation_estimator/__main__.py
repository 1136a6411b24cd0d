"""Allow ``python -m liquidation_estimator``."""
from .cli import main

if __name__ == "__main__":
    main()
