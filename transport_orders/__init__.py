"""Top-level package for the Transport Orders project.

This package manages freight transport orders: creating an order from a
requester with its pickup and drop-off locations and cargo lines, and
moving it through an approval workflow.
"""
