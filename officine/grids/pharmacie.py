"""Grid IP-F-0018 — community pharmacy (officine) inspection."""

from __future__ import annotations

from officine.grids.builder import CriterionBuilder
from officine.schemas.grids import Grid, Section


def build() -> Grid:
    b = CriterionBuilder()

    return Grid(
        id="officine",
        name="Inspection Pharmacie d'officine",
        code="IP-F-0018",
        version="1",
        description="Grille d'inspection des pharmacies d'officine selon les BPO et la réglementation nationale",
        icon="💊",
        color="#2D5F8D",
        sections=(
            Section(id=1, title="Renseignements généraux", items=(
                b.pre("Loi 2021-03 Art 45", "Prénom et nom du pharmacien titulaire ? Autorisation d'ouverture affichée ?"),
                b.pre("Loi 2021-03 Art 47", "Le pharmacien titulaire exerce-t-il personnellement sa profession ?"),
                b.item("Loi 2021-03 Art 48", "Pharmacien(s) assistant(s) en nombre suffisant au regard du chiffre d'affaires ?"),
                b.item("Décret 2024-1301", "Horaires d'ouverture et tour de garde affichés de façon visible de l'extérieur ?"),
            )),
            Section(id=2, title="Personnel", items=(
                b.pre("BPO 1.01", "Liste du personnel avec qualifications et fonctions tenue à jour ?"),
                b.item("BPO 1.02", "Personnel non pharmacien travaillant sous le contrôle effectif d'un pharmacien ?"),
                b.item("BPO 1.03", "Formation continue du personnel planifiée et enregistrée ?"),
                b.item("BPO 1.04", "Port d'une tenue propre et d'un badge identifiant la qualification ?"),
            )),
            Section(id=3, title="Locaux", items=(
                b.pre("BPO 2.01", "Surface et agencement des locaux conformes ? Espace de confidentialité disponible ?"),
                b.pre("BPO 2.02", "Locaux propres, bien éclairés et ventilés ? Absence de nuisibles ?"),
                b.pre("BPO 2.03", "Zone de stockage séparée de l'espace de vente ? Médicaments hors de portée du public ?"),
                b.item("BPO 2.04", "Local ou armoire sécurisé fermant à clé pour les stupéfiants ?"),
                b.item("BPO 2.05", "Préparatoire équipé et réservé aux préparations magistrales ?"),
            )),
            Section(id=4, title="Conservation des médicaments", items=(
                b.pre("BPO 3.01", "Température de stockage relevée quotidiennement et enregistrée ?"),
                b.pre("BPO 3.02", "Réfrigérateur dédié aux produits thermosensibles avec thermomètre mini/maxi ?"),
                b.item("BPO 3.03", "Contrôle des dates de péremption organisé ? Produits périmés isolés et identifiés ?"),
                b.item("BPO 3.04", "Absence de médicaments exposés à la lumière directe du soleil ?"),
            )),
            Section(id=5, title="Approvisionnement", items=(
                b.pre("Loi 2021-03 Art 56", "Approvisionnement exclusivement auprès de grossistes-répartiteurs autorisés ?"),
                b.item("BPO 4.01", "Factures et bons de livraison conservés et classés ?"),
                b.item("BPO 4.02", "Absence de médicaments non autorisés ou d'origine douteuse ?"),
            )),
            Section(id=6, title="Dispensation", items=(
                b.item("BPO 5.01", "Ordonnancier tenu à jour pour les médicaments sur liste ?"),
                b.item("BPO 5.02", "Registre des stupéfiants coté, paraphé et tenu sans rature ?"),
                b.item("BPO 5.03", "Analyse pharmaceutique de l'ordonnance avant délivrance ?"),
                b.item("BPO 5.04", "Conseils de bon usage donnés au patient lors de la délivrance ?"),
            )),
            Section(id=7, title="Documentation et déchets", items=(
                b.item("BPO 6.01", "Documentation réglementaire disponible (pharmacopée, textes en vigueur) ?"),
                b.item("BPO 6.02", "Procédure de gestion des retours et des rappels de lots ?"),
                b.item("BPO 6.03", "Élimination des déchets pharmaceutiques par une filière agréée ?"),
            )),
        ),
    )
