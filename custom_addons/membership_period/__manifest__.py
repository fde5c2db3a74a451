# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

{
    'name': 'Membership Periods',
    'version': '18.0.1.0.0',
    'category': 'Operations/Membership',
    'summary': 'Coverage periods reconciled with membership edits and payments',
    'description': '''
        Tracks the coverage timeline of each membership as a sequence of
        non-overlapping periods tied to the payments funding them:
        * Initial period on membership creation
        * Period reconciliation when join/end dates or status change
        * Pending period creation and payment linkage on membership payments
        * Scheduled deactivation / end date adjustment of overdue periods
        * Renewal wizard driving the reconciliation
    ''',
    'author': 'AMS Development Team',
    'website': 'https://www.ams-software.com',
    'license': 'LGPL-3',
    'depends': [
        'base',
        'mail',
        'membership_core',
    ],
    'external_dependencies': {
        'python': ['dateutil'],
    },
    'data': [
        'security/ir.model.access.csv',
        'data/ir_cron_data.xml',
        'views/membership_period_views.xml',
        'views/membership_renewal_wizard_views.xml',
        'views/res_config_settings_views.xml',
    ],
    'installable': True,
    'application': False,
    'auto_install': False,
}
