"""Authorization rules.

Administrators may do anything. Everyone else is limited to their own
orders, and may only cancel one while it is still pending or confirmed.
"""

from coffeerun.exceptions import NotAuthorizedError
from coffeerun.models import Order, Product


def _order_rules(user, order, action):
    owns = order.user_id == user.id
    if action == 'create':
        return True
    if action in ('index', 'show'):
        return owns
    if action in ('update', 'cancel'):
        return owns and order.can_be_cancelled()
    return False


def _product_rules(user, product, action):
    return action in ('index', 'show')


RULES = {
    Order: _order_rules,
    Product: _product_rules,
}

# Actions a non-admin may take against the model as a whole.
COLLECTION_ACTIONS = {
    Order: ('index', 'create'),
    Product: ('index',),
}


def authorize(user, resource, action):
    """Return True when ``user`` may perform ``action`` on ``resource``.

    ``resource`` may be an instance or a model class (for index/create).
    """
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    if user.is_admin():
        return True

    if isinstance(resource, type):
        return action in COLLECTION_ACTIONS.get(resource, ())

    rule = RULES.get(type(resource))
    if rule is None:
        return False
    return rule(user, resource, action)


def enforce(user, resource, action):
    """authorize() or raise NotAuthorizedError."""
    if not authorize(user, resource, action):
        raise NotAuthorizedError(action=action, resource=resource)
    return resource


def scope_orders(user):
    """Orders visible to ``user`` in listings."""
    query = Order.recent()
    if user.is_admin():
        return query
    return query.filter(Order.user_id == user.id)
