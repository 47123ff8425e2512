"""Grid IP-FO-0002 — wholesaler-distributor (grossiste-répartiteur) inspection."""

from __future__ import annotations

from officine.grids.builder import CriterionBuilder
from officine.schemas.grids import Grid, Section


def build() -> Grid:
    b = CriterionBuilder()

    return Grid(
        id="grossiste",
        name="Inspection Grossiste-Répartiteur",
        code="IP-FO-0002",
        version="1",
        description="Grille d'inspection des établissements de grossiste-répartiteur selon les BPD/UEMOA",
        icon="🏭",
        color="#3b82f6",
        sections=(
            Section(id=1, title="Organisation et gestion", items=(
                b.pre("BPD/I UEMOA 1.01 ; Loi 2021-03 Art 56", "L'établissement est-il dûment autorisé ? Dispose-t-il d'un pharmacien responsable de l'ensemble des opérations de distribution ?"),
                b.pre("BPD/I UEMOA 1.02", "Organigramme défini ? Responsabilités, autorité et relations clairement représentées ?"),
                b.item("BPD/I UEMOA 1.07", "Responsabilités individuelles clairement définies et consignées dans des descriptions de fonction écrites ?"),
                b.item("BPD/I UEMOA 1.08", "Activités sous-traitées précisées dans des cahiers des charges ou contrats écrits ? Audits réguliers ?"),
            )),
            Section(id=2, title="Gestion de la qualité", items=(
                b.pre("BPD/I UEMOA 1.10, 1.11", "Système d'assurance qualité en place intégrant les principes des BPD ?"),
                b.pre("BPD/I UEMOA 1.15", "Procédures approuvées pour l'approvisionnement et la libération des livraisons ? Fournisseurs approuvés ?"),
                b.pre("BPD/I UEMOA 1.16", "Procédures écrites et systèmes d'enregistrement garantissant la traçabilité des produits distribués ?"),
            )),
            Section(id=3, title="Personnel", items=(
                b.pre("BPD/I UEMOA 1.19", "Tout le personnel engagé dans la distribution formé aux exigences des BPD ?"),
                b.pre("BPD/I UEMOA 1.23", "Formation initiale et continue adaptée aux tâches ? Programme de formation écrit ?"),
                b.item("BPD/I UEMOA 1.25", "Formation spécifique pour le personnel manipulant des produits dangereux (stupéfiants, produits très actifs) ?"),
                b.item("Décret 2024-1301 ; Loi 2021-03", "Pharmacien responsable avec au moins 5 ans d'expérience en officine ou 2 ans en distribution en gros ?"),
            )),
            Section(id=4, title="Réclamations et rappels", items=(
                b.item("BPD/I UEMOA 1.38", "Procédure écrite pour la gestion des réclamations ?"),
                b.item("BPD/I UEMOA 1.43", "Système de rappel pour les produits reconnus ou soupçonnés comme défectueux ?"),
                b.item("BPD/I UEMOA 1.48", "Produits rappelés séparés physiquement et stockés en zone sécurisée ?"),
            )),
            Section(id=5, title="Locaux et stockage", items=(
                b.pre("BPD/I UEMOA 2.01", "Locaux suffisamment vastes et bien entretenus pour le stockage ?"),
                b.pre("BPD/I UEMOA 2.08", "Zone de quarantaine clairement délimitée ? Accès restreint au personnel autorisé ?"),
                b.pre("BPD/I UEMOA 2.13", "Température et hygiène des zones de stockage surveillées ? Instruments étalonnés ?"),
                b.item("BPD/I UEMOA 2.14", "Cartographie de température (mapping) effectuée dans les zones de stockage ?"),
            )),
            Section(id=6, title="Approvisionnement et expédition", items=(
                b.pre("BPD/I UEMOA 3.01", "Produits approvisionnés uniquement auprès d'entités dûment autorisées ?"),
                b.item("BPD/I UEMOA 3.10", "Système de rotation des stocks mis en place (FEFO/FIFO) ?"),
                b.item("BPD/I UEMOA 3.18", "Vente uniquement aux entités autorisées (officines, PUI, autres grossistes autorisés) ?"),
                b.item("BPD/I UEMOA 4.04 à 4.08", "Chaîne du froid maintenue pour les produits thermosensibles pendant le transport ?"),
            )),
            Section(id=7, title="Lutte contre la contrefaçon / PSQIF", items=(
                b.item("BPD/I UEMOA 6.01 à 6.03", "Système de prévention et de détection des produits de qualité inférieure et falsifiés ?"),
                b.item("Loi 2021-03 Art 23, 24", "Notification des cas suspectés aux autorités compétentes ?"),
            )),
        ),
    )
