"""
Core of dubbo-config.

- config: configuration schemas and the resolution/materialization engine
- extension: named extensions known per capability
- utils: logging
"""
