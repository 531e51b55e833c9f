from typing import Iterable, List


def find_duplicates(values: Iterable[str]) -> List[str]:
	"""
	Return the values that occur more than once, in the order their first
	repeat is seen. Each duplicate is reported once.
	"""
	seen = set()
	reported = set()
	duplicates = []
	for value in values:
		if value in seen and value not in reported:
			duplicates.append(value)
			reported.add(value)
		seen.add(value)
	return duplicates


def sorted_intersection(first: Iterable[str], second: Iterable[str]) -> List[str]:
	"""Return the values present in both iterables, sorted and de-duplicated."""
	return sorted(set(first) & set(second))
