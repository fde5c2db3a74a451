# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

{
    'name': 'Membership Core',
    'version': '18.0.1.0.0',
    'category': 'Operations/Membership',
    'summary': 'Membership, contribution and payment plan registries',
    'description': '''
        Core membership records used by the membership period engine:
        * Membership types with a term length (duration unit and interval)
        * Membership records and lifecycle status
        * Contributions, recurring contributions (payment plans) and processors
        * Recurring line items attributed to memberships
        * Membership payments linking contributions to memberships
    ''',
    'author': 'AMS Development Team',
    'website': 'https://www.ams-software.com',
    'license': 'LGPL-3',
    'depends': [
        'base',
        'mail',
    ],
    'data': [
        'security/ir.model.access.csv',
        'data/membership_sequence.xml',
    ],
    'installable': True,
    'application': False,
    'auto_install': False,
}
