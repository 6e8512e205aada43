#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rtw_app.config.loader import ConfigLoader
from rtw_app.config.validation import ConfigValidator, ValidationError
from rtw_app.errors import SentenceSourceError
from rtw_app.selection.sentences import SentenceBank


def report(label: str, errors: List[ValidationError]) -> bool:
    """Print validation errors for one configuration variant."""
    if errors:
        print(f"❌ {label}: {len(errors)} validation errors")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        return False
    print(f"✅ {label} is valid")
    return True


def main():
    """Main validation function."""
    print("🔍 Validating reading challenge configuration...")

    loader = ConfigLoader.create()
    all_valid = True

    print(f"\n📁 Config directory: {loader.config_dir}")
    config = loader.merge_config()
    all_valid &= report("settings.yaml", ConfigValidator.validate_config(config))

    # Typical household overrides
    test_overrides = {
        "challenge": {"max_attempts": 3, "help_settle_ms": 1500},
        "recognizer": {"language": "en-GB"},
    }
    config = loader.merge_config(test_overrides)
    all_valid &= report("Override example", ConfigValidator.validate_config(config))

    print(f"\n📚 Checking sentence bank...")
    try:
        bank = SentenceBank.from_file(loader.config_dir / "sentences.yaml")
        for level in bank.levels:
            print(f"  • Level {level.id} ({level.name}): {len(level.sentences)} sentences")
            if not level.sentences:
                print(f"❌ Level {level.id} has no sentences")
                all_valid = False
    except SentenceSourceError as e:
        print(f"❌ Could not load sentences: {e}")
        all_valid = False

    if all_valid:
        print(f"\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
