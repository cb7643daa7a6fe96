#!/usr/bin/env python3
"""
Quick Start Guide for xml-mapper.

Walks through mapping dataclasses to XML, parsing XML back into objects,
and comparing two trees structurally.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xml_mapper import ConvertibleNode, DynamicNode, MapperConfig, compare, parse, to_string


@dataclass
class Person(ConvertibleNode):
    name: Optional[str] = None
    surname: Optional[str] = None


@dataclass
class Head(ConvertibleNode):
    title: Optional[str] = None


def conversion_example():
    """Objects to XML and back."""

    print("🚀 QUICK START - xml-mapper")
    print("=" * 45)

    print("\n📄 Step 1: Objects to XML")
    print("-" * 30)

    person = Person(name="Alexander", surname="Letnikow")
    person.xml_children = [Head(title="CTO")]
    print(to_string(person, MapperConfig.readable()))

    print("\n📥 Step 2: XML to objects")
    print("-" * 30)

    xml = '<Person name="Alexander"><Head title="CTO"/><pet kind="cat"/></Person>'
    parsed = parse(xml, Person, [Head])
    for child in parsed.xml_children:
        print(f"  {type(child).__name__}: {child.get_xml_attributes()}")


def comparison_example():
    """Intersect, diff and equal on two small trees."""

    print("\n\n🔍 COMPARISON EXAMPLE")
    print("=" * 40)

    left = DynamicNode("team", {"id": "1"}, xml_children=[
        Person(name="Alexander", surname="Letnikow"),
        Person(name="Maria", surname="Ivanova"),
    ])
    right = DynamicNode("team", {"id": "1"}, xml_children=[
        Person(name="Alexander", surname="Letnikow"),
        Person(name="Oleg", surname="Petrov"),
    ])

    config = MapperConfig.compact()
    for operation in ("intersect", "diff", "equal"):
        result = compare(left, right, operation, config=config)
        print(f"\n📋 {operation}:")
        print(f"  Success: {result.success}")
        if result.rendered is not None:
            print(f"  {result.rendered}")


def main():
    """Main function."""
    try:
        conversion_example()
        comparison_example()

        print("\n✅ All examples completed successfully!")
        return 0

    except Exception as e:
        print(f"\n❌ Example failed: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
