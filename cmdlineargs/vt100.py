CYAN = "\033[36m"
WHITE = "\033[37m"
YELLOW = "\033[33m"

BOLD = "\033[1m"
RESET = "\033[0m"


def indent(text: str, indent: int = 4, first: bool = True) -> str:
    lead = " " * indent if first else ""
    return lead + text.replace("\n", "\n" + " " * indent)


def title(text: str):
    print(f"{BOLD+WHITE}{text}{RESET}")
