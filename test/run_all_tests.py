import subprocess
import sys
from pathlib import Path

def run_test(script_path):
    """Runs one test module through pytest and returns True when it passes."""
    print(f"\n{'='*20} RUNNING TEST: {script_path.name} {'='*20}")
    command = [sys.executable, "-m", "pytest", "-q", str(script_path)]
    process = subprocess.run(
        command,
        capture_output=True,
        text=True,
        check=False, # Don't raise exception on non-zero exit code
        encoding='utf-8',
        cwd=script_path.parent.parent,
    )

    if process.stdout:
        print("--- STDOUT ---")
        print(process.stdout)
    if process.stderr:
        print("--- STDERR ---")
        print(process.stderr)

    if process.returncode == 0:
        print(f"-----> RESULT: PASS ({script_path.name}) <-----")
        return True
    print(f"-----> RESULT: FAIL ({script_path.name}) - Exit Code: {process.returncode} <-----")
    return False

def main():
    """Finds and runs all test modules."""
    test_dir = Path(__file__).parent
    test_scripts = sorted(test_dir.glob("test_*.py"))

    results = {}
    all_passed = True

    for script in test_scripts:
        success = run_test(script)
        results[script.name] = "PASS" if success else "FAIL"
        if not success:
            all_passed = False

    print(f"\n{'='*20} OVERALL TEST SUMMARY {'='*20}")
    for name, result in results.items():
        print(f"{name:<40} {result}")
    print("="*62)

    if all_passed:
        print("\nAll tests passed.")
        sys.exit(0)
    else:
        print("\nSome tests failed. Please review the logs above.")
        sys.exit(1)

if __name__ == "__main__":
    main()
