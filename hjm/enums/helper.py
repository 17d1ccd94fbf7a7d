# -*- coding: utf-8 -*-
import os
if __name__ == "__main__":
    os.chdir(os.environ.get('PROJECT_DIR_HJM'))


def clean_enum_value(value, transform_fn=None):
    if isinstance(value, str):
        value = value.lower().strip().replace(' ','_').replace('-','_')
        if transform_fn:
            value = transform_fn(value)
    return value


def get_enum_member(enum_class, value, transform_fn=None):
    cleaned_value = clean_enum_value(value, transform_fn)
    for enum_member in enum_class:
        if enum_member.value == cleaned_value:
            return enum_member

    # List all valid codes in case of an error
    valid_values = [enum_member.value for enum_member in enum_class]
    raise ValueError(f"Invalid value: {value}. Valid codes are: {valid_values}")
