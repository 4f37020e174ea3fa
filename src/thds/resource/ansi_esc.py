# thanks to https://gist.github.com/fnky/458719343aabd01cfb17a3a4f7296797


class fg:
    BLUE = "\033[34m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RESET = "\033[39m"


class bg:
    ERROR_RED = "\033[48;5;196m"
    RESET = "\033[49m"


class style:
    BRIGHT = "\033[1m"
    NORMAL = "\033[22m"


def colored(text: str, color: str, bright: bool = False) -> str:
    reset = bg.RESET if color.startswith("\033[48") else fg.RESET
    if bright:
        return f"{color}{style.BRIGHT}{text}{style.NORMAL}{reset}"
    return f"{color}{text}{reset}"
