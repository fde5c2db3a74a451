# -*- coding: utf-8 -*-

from . import membership_renewal_wizard
