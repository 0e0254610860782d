"""`python -m on_the_gpu --gl glxgears`"""

from .cli import main

if __name__ == "__main__":
    main()
