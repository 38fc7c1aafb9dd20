VALUE = 1
