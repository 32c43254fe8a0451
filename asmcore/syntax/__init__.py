"""Token recognition and decoding of number and string literals."""