""" busroute models a bus route as a circular list of stops. """
