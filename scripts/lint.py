"""
Lint script runner.
"""
import subprocess

def main():
    """
    Lint the Lox project using flake8 and pylint.
    """
    print("Running flake8...")
    subprocess.run([
        "flake8",
        "./loxlang",
        "./lox.py",
        "--exclude=loxlang/tests",
        "--max-line-length=110"
    ], check=True)

    print("Running pylint...")
    subprocess.run([
        "pylint",
        "./loxlang",
        "./lox.py",
        "--ignore=tests",
        "--max-line-length=110"
    ], check=True)


if __name__ == "__main__":
    main()
