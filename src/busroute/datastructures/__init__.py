""" Subpackage containing the route, its stops and the route file. """
