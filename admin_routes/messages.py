"""
User-facing banner messages for the administration pages (Slovenian).
"""

CSRF_INVALID = 'Neveljavna oddaja obrazca. Poskusite znova.'
CSRF_GENERATION_FAILED = 'Generiranje varnostnega žetona ni uspelo. Poskusite znova kasneje.'
UNKNOWN_ACTION = 'Neveljavno dejanje. Poskusite znova.'

# Classes
CLASS_ID_INVALID = 'Neveljaven ID razreda.'
CLASS_NAME_REQUIRED = 'Ime razreda je obvezno.'
CLASS_CODE_REQUIRED = 'Koda razreda je obvezna.'
CLASS_TEACHER_INVALID = 'Izberite veljavnega razrednika.'
CLASS_CREATED = 'Razred je bil uspešno ustvarjen.'
CLASS_CREATE_FAILED = 'Napaka pri ustvarjanju razreda. Preverite podatke in poskusite znova.'
CLASS_UPDATED = 'Razred je bil uspešno posodobljen.'
CLASS_UPDATE_FAILED = 'Napaka pri posodabljanju razreda. Preverite podatke in poskusite znova.'
CLASS_DELETED = 'Razred je bil uspešno izbrisan.'
CLASS_DELETE_FAILED = ('Napaka pri brisanju razreda. Razred ne more biti izbrisan, '
                       'če ima dodeljene učence ali predmete.')

# Subjects
SUBJECT_ID_INVALID = 'Neveljaven ID predmeta.'
SUBJECT_NAME_REQUIRED = 'Ime predmeta je obvezno.'
SUBJECT_CREATED = 'Predmet uspešno ustvarjen.'
SUBJECT_CREATE_FAILED = 'Napaka pri ustvarjanju predmeta.'
SUBJECT_UPDATED = 'Predmet uspešno posodobljen.'
SUBJECT_UPDATE_FAILED = 'Napaka pri posodabljanju predmeta.'
SUBJECT_DELETED = 'Predmet uspešno izbrisan.'
SUBJECT_DELETE_FAILED = 'Napaka pri brisanju predmeta. Preverite, da predmet ni povezan z razredi.'
